"""
Pydantic schemas for documents and their alerts.
"""
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vecdoc.models.alert import AlertStatus, AlertType
from vecdoc.models.document import DocumentType


class DocumentCreate(BaseModel):
    """Document creation payload."""
    bike_id: str
    user_id: str
    document_type: DocumentType = DocumentType.OTHER
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    issue_date: Optional[date] = None
    expiry_date: Optional[date] = None


class DocumentUpdate(BaseModel):
    """Partial update; only fields present in the payload change."""
    user_id: str
    document_type: Optional[DocumentType] = None
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    issue_date: Optional[date] = None
    expiry_date: Optional[date] = None

    @field_validator("document_type", "title")
    @classmethod
    def not_null(cls, value, info):
        # Omitted keeps the stored value; required columns take no null
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


class AlertResponse(BaseModel):
    """Alert instance as stored."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    document_id: str
    user_id: str
    alert_type: AlertType
    scheduled_at: datetime
    status: AlertStatus
    retry_count: int
    last_error: Optional[str] = None
    sent_at: Optional[datetime] = None


class AlertListResponse(BaseModel):
    items: list[AlertResponse]
    total: int


class DocumentResponse(BaseModel):
    """Document with its urgency."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    bike_id: str
    user_id: str
    document_type: DocumentType
    title: str
    description: Optional[str] = None
    issue_date: Optional[date] = None
    expiry_date: Optional[date] = None
    created_at: datetime
    days_until_expiry: Optional[int] = None
    alerts: list[AlertResponse] = []


class DocumentListResponse(BaseModel):
    items: list[DocumentResponse]
    total: int


class AlertTickResponse(BaseModel):
    """Outcome counts of one processing tick."""
    sent: int = 0
    deferred: int = 0
    suppressed: int = 0
    cancelled: int = 0
    retry_scheduled: int = 0
    failed: int = 0
    skipped: int = 0
    error: int = 0
