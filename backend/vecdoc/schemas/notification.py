"""
Pydantic schemas for notifications and notification settings.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from vecdoc.models.notification import NotificationPriority, NotificationStatus

TIME_OF_DAY_PATTERN = r"^([01]\d|2[0-3]):([0-5]\d)$"


class NotificationEntry(BaseModel):
    """Notification handed to the delivery service."""
    user_id: str
    title: str
    body: str
    category: str = "document"
    priority: NotificationPriority = NotificationPriority.NORMAL
    data: dict = Field(default_factory=dict)


class NotificationResponse(BaseModel):
    """Queued notification as stored."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    body: str
    category: str
    priority: NotificationPriority
    data: Optional[dict] = None
    status: NotificationStatus
    scheduled_at: datetime
    sent_at: Optional[datetime] = None
    created_at: datetime


class NotificationListResponse(BaseModel):
    """Notification history page."""
    items: list[NotificationResponse]
    total: int
    skip: int = 0
    limit: int = 20


class NotificationSettingsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    push_enabled: bool
    email_enabled: bool
    sms_enabled: bool
    quiet_hours_start: Optional[str] = None
    quiet_hours_end: Optional[str] = None
    document_alerts: bool
    maintenance_alerts: bool


class NotificationSettingsUpdate(BaseModel):
    """Partial settings update; omitted fields keep their value."""
    push_enabled: Optional[bool] = None
    email_enabled: Optional[bool] = None
    sms_enabled: Optional[bool] = None
    quiet_hours_start: Optional[str] = Field(default=None, pattern=TIME_OF_DAY_PATTERN)
    quiet_hours_end: Optional[str] = Field(default=None, pattern=TIME_OF_DAY_PATTERN)
    document_alerts: Optional[bool] = None
    maintenance_alerts: Optional[bool] = None
