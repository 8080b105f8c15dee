"""
Document model.
"""
from datetime import date, datetime
from enum import Enum
from typing import Optional

from sqlalchemy import Date, DateTime, Enum as SAEnum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vecdoc.core.database import Base
from vecdoc.core.utils import now_local, new_id
from vecdoc.models.bike import Bike


class DocumentType(str, Enum):
    INSURANCE = "insurance"
    SMOKE_TEST = "smoke_test"
    LICENSE = "license"
    REGISTRATION = "registration"
    SERVICE_RECORD = "service_record"
    OTHER = "other"


class Document(Base):
    """A bike document that may carry an expiry date."""
    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    bike_id: Mapped[str] = mapped_column(ForeignKey("bikes.id"), nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    document_type: Mapped[DocumentType] = mapped_column(
        SAEnum(DocumentType, values_callable=lambda e: [m.value for m in e], native_enum=False, length=20),
        nullable=False,
        default=DocumentType.OTHER,
    )
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    issue_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    expiry_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=now_local)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=now_local, onupdate=now_local)
    deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    bike: Mapped[Optional[Bike]] = relationship(Bike, lazy="joined")
