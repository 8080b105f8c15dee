"""
Notification settings and the outbound notification queue.
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import Boolean, DateTime, Enum as SAEnum, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from vecdoc.core.database import Base
from vecdoc.core.utils import now_local, new_id


class NotificationPriority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    CRITICAL = "critical"


class NotificationStatus(str, Enum):
    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"
    CANCELLED = "cancelled"


def _values(enum_cls):
    return [m.value for m in enum_cls]


class NotificationSettings(Base):
    """Per-user notification preferences."""
    __tablename__ = "notification_settings"

    user_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    push_enabled: Mapped[bool] = mapped_column(Boolean, default=True)
    email_enabled: Mapped[bool] = mapped_column(Boolean, default=True)
    sms_enabled: Mapped[bool] = mapped_column(Boolean, default=False)
    quiet_hours_start: Mapped[Optional[str]] = mapped_column(String(5), nullable=True)  # "HH:MM"
    quiet_hours_end: Mapped[Optional[str]] = mapped_column(String(5), nullable=True)
    document_alerts: Mapped[bool] = mapped_column(Boolean, default=True)
    maintenance_alerts: Mapped[bool] = mapped_column(Boolean, default=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=now_local, onupdate=now_local)

    @classmethod
    def defaults(cls, user_id: str) -> "NotificationSettings":
        """Permissive settings for a user without a stored row (not added to the session)."""
        return cls(
            user_id=user_id,
            push_enabled=True,
            email_enabled=True,
            sms_enabled=False,
            quiet_hours_start=None,
            quiet_hours_end=None,
            document_alerts=True,
            maintenance_alerts=True,
        )


class NotificationQueueEntry(Base):
    """Outbound notification, picked up by the delivery service."""
    __tablename__ = "notification_queue"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    data: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    category: Mapped[str] = mapped_column(String, nullable=False)
    priority: Mapped[NotificationPriority] = mapped_column(
        SAEnum(NotificationPriority, values_callable=_values, native_enum=False, length=20),
        nullable=False,
        default=NotificationPriority.NORMAL,
    )
    status: Mapped[NotificationStatus] = mapped_column(
        SAEnum(NotificationStatus, values_callable=_values, native_enum=False, length=20),
        nullable=False,
        default=NotificationStatus.PENDING,
    )
    scheduled_at: Mapped[datetime] = mapped_column(DateTime, default=now_local)
    sent_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    error_message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=now_local)
