"""
Background task for document expiry alerts.
Runs one processing tick at start-up and then every ALERT_CHECK_INTERVAL_SECONDS.
"""
import asyncio
import logging
from typing import Callable, Optional

from sqlalchemy.orm import Session

from vecdoc.core.config import settings
from vecdoc.services.alert_processor import AlertProcessor
from vecdoc.services.notification_queue import create_notification_queue

logger = logging.getLogger(__name__)


def run_alert_tick(session_factory: Callable[[], Session]) -> dict[str, int]:
    """One tick on a fresh session; errors of the due-alert query propagate."""
    db = session_factory()
    queue = create_notification_queue(db)
    try:
        return AlertProcessor(db, queue).process_due_alerts()
    finally:
        queue.close()
        db.close()


class AlertScheduler:
    """Owns the recurring alert task; started and stopped with the process."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        interval_seconds: float = settings.ALERT_CHECK_INTERVAL_SECONDS,
    ):
        self.session_factory = session_factory
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> Optional[dict[str, int]]:
        """Runs a tick in a worker thread; failures are logged and left to the next tick."""
        try:
            return await asyncio.to_thread(run_alert_tick, self.session_factory)
        except Exception as e:
            logger.error(f"Error processing document alerts: {e}")
            return None

    async def _run_forever(self) -> None:
        logger.info("Alert scheduler started")
        while True:
            await self.run_once()
            await asyncio.sleep(self.interval_seconds)

    def start(self) -> None:
        if self.is_running:
            logger.info("Alert scheduler already running, skipping")
            return
        self._task = asyncio.create_task(self._run_forever())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Alert scheduler stopped")
