"""
Access to document alerts and the records the alert engine reads.

Every status change goes through ``transition``: an UPDATE that only
matches while the row is still ``pending``, so overlapping ticks cannot
move the same alert twice.
"""
import logging
from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy import and_, select, update
from sqlalchemy.orm import Session

from vecdoc.models.alert import AlertStatus, DocumentAlert
from vecdoc.models.document import Document
from vecdoc.models.notification import NotificationSettings

logger = logging.getLogger(__name__)


class AlertStore:
    """Alert persistence over an explicitly passed session."""

    def __init__(self, db: Session):
        self.db = db

    def list_due(self, now: datetime, limit: int = 100) -> list[DocumentAlert]:
        """Pending alerts whose time has come, oldest first."""
        stmt = (
            select(DocumentAlert)
            .where(
                and_(
                    DocumentAlert.status == AlertStatus.PENDING,
                    DocumentAlert.scheduled_at <= now,
                )
            )
            .order_by(DocumentAlert.scheduled_at)
            .limit(limit)
        )
        return list(self.db.scalars(stmt))

    def list_for_document(
        self,
        document_id: str,
        status: Optional[AlertStatus] = None,
    ) -> list[DocumentAlert]:
        stmt = select(DocumentAlert).where(DocumentAlert.document_id == document_id)
        if status is not None:
            stmt = stmt.where(DocumentAlert.status == status)
        return list(self.db.scalars(stmt.order_by(DocumentAlert.scheduled_at)))

    def insert_many(self, alerts: Iterable[DocumentAlert]) -> list[DocumentAlert]:
        alerts = list(alerts)
        self.db.add_all(alerts)
        self.db.flush()
        return alerts

    def transition(
        self,
        alert_id: str,
        values: dict,
        expected_retry_count: Optional[int] = None,
    ) -> bool:
        """Applies ``values`` if the alert is still pending.

        Returns False when another worker got there first.
        """
        conditions = [
            DocumentAlert.id == alert_id,
            DocumentAlert.status == AlertStatus.PENDING,
        ]
        if expected_retry_count is not None:
            conditions.append(DocumentAlert.retry_count == expected_retry_count)

        result = self.db.execute(
            update(DocumentAlert)
            .where(and_(*conditions))
            .values(**values)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount == 1

    def cancel_pending(self, document_id: str) -> int:
        """Marks all pending alerts of a document as acknowledged."""
        result = self.db.execute(
            update(DocumentAlert)
            .where(
                and_(
                    DocumentAlert.document_id == document_id,
                    DocumentAlert.status == AlertStatus.PENDING,
                )
            )
            .values(status=AlertStatus.ACKNOWLEDGED)
            .execution_options(synchronize_session="fetch")
        )
        self.db.flush()
        count = result.rowcount
        if count:
            logger.info("Cancelled %s pending alerts for document %s", count, document_id)
        return count

    def get_document(self, document_id: str) -> Optional[Document]:
        return self.db.get(Document, document_id)

    def get_notification_settings(self, user_id: str) -> NotificationSettings:
        """Stored settings, or permissive defaults when the user has none."""
        stored = self.db.get(NotificationSettings, user_id)
        return stored if stored is not None else NotificationSettings.defaults(user_id)
