"""
Derives the expiry reminder schedule of a document.
"""
import logging
from datetime import date, datetime, time, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from vecdoc.core.config import settings
from vecdoc.core.utils import now_local
from vecdoc.models.alert import ALERT_LADDER, AlertStatus, AlertType, DocumentAlert
from vecdoc.models.document import Document
from vecdoc.services.alert_store import AlertStore

logger = logging.getLogger(__name__)


def build_schedule(
    expiry_date: date,
    now: datetime,
    alert_hour: int = settings.ALERT_HOUR,
) -> list[tuple[AlertType, datetime]]:
    """Fire times for every rung of the ladder that is still in the future.

    Each rung fires at ``alert_hour`` local time, ``days_before`` the expiry date.
    Rungs whose fire time is not strictly after ``now`` are dropped.
    """
    schedule = []
    for alert_type, days_before in ALERT_LADDER:
        fire_at = datetime.combine(expiry_date - timedelta(days=days_before), time(hour=alert_hour))
        if fire_at > now:
            schedule.append((alert_type, fire_at))
    return schedule


class AlertScheduleService:
    """Creates and cancels the alert instances of a document."""

    def __init__(self, db: Session, store: Optional[AlertStore] = None):
        self.db = db
        self.store = store or AlertStore(db)

    def schedule_alerts(self, document: Document, now: Optional[datetime] = None) -> list[DocumentAlert]:
        """
        Replaces the document's schedule.
        Pending alerts of the previous schedule are cancelled first, so at most
        one schedule per document is ever active.
        """
        now = now or now_local()
        self.store.cancel_pending(document.id)

        if document.expiry_date is None or document.deleted_at is not None:
            return []

        alerts = [
            DocumentAlert(
                document_id=document.id,
                user_id=document.user_id,
                alert_type=alert_type,
                scheduled_at=fire_at,
                status=AlertStatus.PENDING,
                retry_count=0,
            )
            for alert_type, fire_at in build_schedule(document.expiry_date, now)
        ]
        if alerts:
            self.store.insert_many(alerts)

        logger.info(
            f"Scheduled {len(alerts)} alerts for document {document.id}, expiry {document.expiry_date}"
        )
        return alerts

    def cancel_alerts(self, document_id: str) -> int:
        """Cancels every still-pending alert of the document."""
        return self.store.cancel_pending(document_id)
