"""
Document alert model (one scheduled reminder per document and rung).
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from vecdoc.core.database import Base
from vecdoc.core.utils import now_local, new_id


class AlertType(str, Enum):
    """Severity rungs, ordered from the earliest reminder to the expiry day."""
    THIRTY_DAY = "30_day"
    SEVEN_DAY = "7_day"
    ONE_DAY = "1_day"
    EXPIRED = "expired"


class AlertStatus(str, Enum):
    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"
    ACKNOWLEDGED = "acknowledged"


# (rung, days before expiry); order matters
ALERT_LADDER: tuple[tuple[AlertType, int], ...] = (
    (AlertType.THIRTY_DAY, 30),
    (AlertType.SEVEN_DAY, 7),
    (AlertType.ONE_DAY, 1),
    (AlertType.EXPIRED, 0),
)


def _values(enum_cls):
    return [m.value for m in enum_cls]


class DocumentAlert(Base):
    """Scheduled expiry reminder."""
    __tablename__ = "document_alerts"
    __table_args__ = (
        Index("ix_document_alerts_status_scheduled_at", "status", "scheduled_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    document_id: Mapped[str] = mapped_column(ForeignKey("documents.id"), nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False)
    alert_type: Mapped[AlertType] = mapped_column(
        SAEnum(AlertType, values_callable=_values, native_enum=False, length=20),
        nullable=False,
    )
    scheduled_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    status: Mapped[AlertStatus] = mapped_column(
        SAEnum(AlertStatus, values_callable=_values, native_enum=False, length=20),
        nullable=False,
        default=AlertStatus.PENDING,
    )
    retry_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_error: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    sent_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=now_local)
