"""
Notification settings and history of queued notifications.
"""
import logging

from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session

from vecdoc.core.exceptions import ValidationException
from vecdoc.models.notification import NotificationQueueEntry, NotificationSettings
from vecdoc.schemas.notification import NotificationSettingsUpdate

logger = logging.getLogger(__name__)


class NotificationSettingsService:
    """Per-user notification preferences."""

    def __init__(self, db: Session):
        self.db = db

    def get_or_create(self, user_id: str) -> NotificationSettings:
        """Stored settings; a default row is created on first access."""
        settings = self.db.get(NotificationSettings, user_id)
        if settings is None:
            settings = NotificationSettings.defaults(user_id)
            self.db.add(settings)
            self.db.flush()
            logger.info("Created default notification settings for user %s", user_id)
        return settings

    def update(self, user_id: str, data: NotificationSettingsUpdate) -> NotificationSettings:
        """Upserts the fields present in ``data``."""
        settings = self.get_or_create(user_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(settings, field, value)

        if bool(settings.quiet_hours_start) != bool(settings.quiet_hours_end):
            raise ValidationException("Quiet hours need both a start and an end")

        self.db.flush()
        logger.info("Notification settings updated for user %s", user_id)
        return settings

    def list_notifications(
        self,
        user_id: str,
        skip: int = 0,
        limit: int = 20,
    ) -> tuple[list[NotificationQueueEntry], int]:
        """Queued notifications of a user, newest first, with the total count."""
        total = self.db.scalar(
            select(func.count(NotificationQueueEntry.id)).where(NotificationQueueEntry.user_id == user_id)
        )
        items = list(
            self.db.scalars(
                select(NotificationQueueEntry)
                .where(NotificationQueueEntry.user_id == user_id)
                .order_by(desc(NotificationQueueEntry.created_at))
                .offset(skip)
                .limit(limit)
            )
        )
        return items, total
