"""
API endpoints for notification settings and history.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from vecdoc.core.database import get_db
from vecdoc.core.security import verify_api_key
from vecdoc.schemas.notification import (
    NotificationListResponse,
    NotificationResponse,
    NotificationSettingsResponse,
    NotificationSettingsUpdate,
)
from vecdoc.services.notification_settings_service import NotificationSettingsService

router = APIRouter(
    prefix="/notifications",
    tags=["notifications"],
    dependencies=[Depends(verify_api_key)],
)


@router.get("", response_model=NotificationListResponse)
def list_notifications(
    user_id: str = Query(...),
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """Notification history of a user, newest first."""
    items, total = NotificationSettingsService(db).list_notifications(user_id, skip=skip, limit=limit)
    return NotificationListResponse(
        items=[NotificationResponse.model_validate(n) for n in items],
        total=total,
        skip=skip,
        limit=limit,
    )


@router.get("/settings/{user_id}", response_model=NotificationSettingsResponse)
def get_notification_settings(user_id: str, db: Session = Depends(get_db)):
    settings = NotificationSettingsService(db).get_or_create(user_id)
    return NotificationSettingsResponse.model_validate(settings)


@router.put("/settings/{user_id}", response_model=NotificationSettingsResponse)
def update_notification_settings(
    user_id: str,
    data: NotificationSettingsUpdate,
    db: Session = Depends(get_db),
):
    """Update notification settings (quiet hours as HH:MM)."""
    settings = NotificationSettingsService(db).update(user_id, data)
    return NotificationSettingsResponse.model_validate(settings)
