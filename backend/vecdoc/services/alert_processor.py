"""
Processes due document alerts: one call is one tick of the alert engine.

Per alert, in order:
- owning document gone or deleted -> acknowledged
- user disabled document alerts -> acknowledged
- inside the user's quiet hours -> rescheduled to just after the window
- otherwise the notification is queued and the alert marked sent

Any per-alert failure, unexpected errors included, is retried after
5, 25 and 125 minutes; a failure once ``max_retries`` retries are used up
marks the alert failed. Every alert is committed on its own, so one bad row never
takes the rest of the batch down with it.
"""
import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from vecdoc.core.config import settings
from vecdoc.core.exceptions import AlertProcessingError
from vecdoc.core.utils import now_local
from vecdoc.models.alert import AlertStatus, DocumentAlert
from vecdoc.services.alert_store import AlertStore
from vecdoc.services.notification_enqueuer import build_notification_for_document
from vecdoc.services.notification_queue import NotificationQueue
from vecdoc.services.quiet_hours import deferral_target

logger = logging.getLogger(__name__)

# Base of the exponential backoff, in minutes
BACKOFF_BASE_MINUTES = 5
# Upper bound on the stored diagnostic
MAX_ERROR_LENGTH = 1000

SENT = "sent"
DEFERRED = "deferred"
SUPPRESSED = "suppressed"
CANCELLED = "cancelled"
RETRY_SCHEDULED = "retry_scheduled"
FAILED = "failed"
SKIPPED = "skipped"
ERROR = "error"

OUTCOMES = (SENT, DEFERRED, SUPPRESSED, CANCELLED, RETRY_SCHEDULED, FAILED, SKIPPED, ERROR)


def backoff_delay(retry_count: int) -> timedelta:
    """Delay before the next attempt after ``retry_count`` failures: 5, 25, 125 minutes."""
    return timedelta(minutes=BACKOFF_BASE_MINUTES ** retry_count)


class AlertProcessor:
    """Turns due alerts into queued notifications."""

    def __init__(
        self,
        db: Session,
        queue: NotificationQueue,
        batch_size: int = settings.ALERT_BATCH_SIZE,
        max_retries: int = settings.ALERT_MAX_RETRIES,
        store: Optional[AlertStore] = None,
    ):
        self.db = db
        self.queue = queue
        self.batch_size = batch_size
        self.max_retries = max_retries
        self.store = store or AlertStore(db)

    def process_due_alerts(self, now: Optional[datetime] = None) -> dict[str, int]:
        """
        Runs one tick and returns how many alerts ended up in each outcome.
        Only a failure of the due-alert query itself is raised to the caller.
        """
        now = now or now_local()
        due = self.store.list_due(now, limit=self.batch_size)
        logger.info(f"Processing {len(due)} pending alerts")

        summary = dict.fromkeys(OUTCOMES, 0)
        # The batch is read once; each row is visited once per tick
        for alert in due:
            alert_id = alert.id
            try:
                outcome = self._process_alert(alert, now)
            except Exception as e:
                logger.exception("Unexpected error processing alert %s", alert_id)
                self.db.rollback()
                outcome = self._record_unexpected_failure(alert, e, now)
            summary[outcome] += 1

        if due:
            logger.info(
                "Alert tick done: " + ", ".join(f"{k}={v}" for k, v in summary.items() if v)
            )
        return summary

    def _process_alert(self, alert: DocumentAlert, now: datetime) -> str:
        if alert.status != AlertStatus.PENDING:
            return SKIPPED

        document = self.store.get_document(alert.document_id)
        if document is None or document.deleted_at is not None:
            logger.info(f"Alert {alert.id}: document {alert.document_id} is gone, cancelling")
            return self._finish(alert, {"status": AlertStatus.ACKNOWLEDGED}, CANCELLED)

        user_settings = self.store.get_notification_settings(alert.user_id)
        if not user_settings.document_alerts:
            logger.info(f"Alert {alert.id}: document alerts disabled for user {alert.user_id}")
            return self._finish(alert, {"status": AlertStatus.ACKNOWLEDGED}, SUPPRESSED)

        send_at = deferral_target(now, user_settings.quiet_hours_start, user_settings.quiet_hours_end)
        if send_at is not None:
            logger.info(f"Alert {alert.id}: quiet hours, deferred to {send_at}")
            return self._finish(alert, {"scheduled_at": send_at}, DEFERRED)

        try:
            entry = build_notification_for_document(alert, document)
            self.queue.enqueue(entry)
        except AlertProcessingError as e:
            logger.error(f"Failed to process alert {alert.id}: {e}")
            self.db.rollback()
            return self._record_failure(alert, e, now)

        outcome = self._finish(alert, {"status": AlertStatus.SENT, "sent_at": now}, SENT)
        if outcome == SENT:
            logger.info(f"Alert sent: {alert.id} for document {alert.document_id}")
        return outcome

    def _finish(self, alert: DocumentAlert, values: dict, outcome: str) -> str:
        """Applies a transition and commits it; a raced row is rolled back and skipped."""
        if not self.store.transition(alert.id, values):
            logger.info(f"Alert {alert.id} is no longer pending, skipping")
            self.db.rollback()
            return SKIPPED
        self.db.commit()
        return outcome

    def _record_unexpected_failure(self, alert: DocumentAlert, error: Exception, now: datetime) -> str:
        """Puts a row that raised outside the processing errors on the retry path too."""
        try:
            return self._record_failure(alert, error, now)
        except Exception:
            logger.exception("Could not record failure for alert %s", alert.id)
            self.db.rollback()
            return ERROR

    def _record_failure(self, alert: DocumentAlert, error: Exception, now: datetime) -> str:
        attempts_before = alert.retry_count or 0
        last_error = (str(error) or type(error).__name__)[:MAX_ERROR_LENGTH]

        # Terminal only once max_retries backoffs were spent: the 4th failure with the default of 3
        if attempts_before >= self.max_retries:
            retry_count = attempts_before
            values = {
                "status": AlertStatus.FAILED,
                "last_error": last_error,
            }
            outcome = FAILED
        else:
            retry_count = attempts_before + 1
            values = {
                "scheduled_at": now + backoff_delay(retry_count),
                "retry_count": retry_count,
                "last_error": last_error,
            }
            outcome = RETRY_SCHEDULED

        if not self.store.transition(alert.id, values, expected_retry_count=attempts_before):
            logger.info(f"Alert {alert.id} changed while failing, skipping")
            self.db.rollback()
            return SKIPPED
        self.db.commit()

        if outcome == FAILED:
            logger.warning(f"Alert {alert.id} failed after {retry_count} retries: {last_error}")
        else:
            logger.info(f"Alert {alert.id} retry {retry_count} at {values['scheduled_at']}")
        return outcome
