"""
Clients for the delivery service's notification queue.

The alert engine never delivers anything itself: it hands a
``NotificationEntry`` to a queue and the delivery service takes it from there.
"""
import logging
from typing import Optional, Protocol

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vecdoc.core.config import settings
from vecdoc.core.exceptions import EnqueueError
from vecdoc.core.security import API_KEY_HEADER
from vecdoc.models.notification import NotificationQueueEntry, NotificationStatus
from vecdoc.schemas.notification import NotificationEntry

logger = logging.getLogger(__name__)


class NotificationQueue(Protocol):
    def enqueue(self, entry: NotificationEntry) -> str:
        """Queues the entry and returns its id; raises EnqueueError on failure."""
        ...

    def close(self) -> None:
        ...


class DatabaseNotificationQueue:
    """Writes entries to the shared ``notification_queue`` table.

    Uses the caller's session, so the insert commits or rolls back together
    with the alert's own status change.
    """

    def __init__(self, db: Session):
        self.db = db

    def enqueue(self, entry: NotificationEntry) -> str:
        row = NotificationQueueEntry(
            user_id=entry.user_id,
            title=entry.title,
            body=entry.body,
            category=entry.category,
            priority=entry.priority,
            data=entry.data,
            status=NotificationStatus.PENDING,
        )
        try:
            self.db.add(row)
            self.db.flush()
        except SQLAlchemyError as e:
            raise EnqueueError(f"Failed to queue notification: {e}") from e
        return row.id

    def close(self) -> None:
        pass


class HttpNotificationQueue:
    """Posts entries to the delivery service over HTTP with a short timeout."""

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        timeout: float = settings.ENQUEUE_TIMEOUT_SECONDS,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        if base_url and not base_url.startswith(("http://", "https://")):
            base_url = "http://" + base_url
        headers = {API_KEY_HEADER: api_key} if api_key else {}
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )
        logger.info(f"Notification queue client initialized with base URL: {base_url}")

    def enqueue(self, entry: NotificationEntry) -> str:
        try:
            response = self._client.post("/notifications", json=entry.model_dump(mode="json"))
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise EnqueueError(f"Notification queue timed out: {e}") from e
        except httpx.HTTPStatusError as e:
            raise EnqueueError(
                f"Notification queue returned {e.response.status_code}: {e.response.text}"
            ) from e
        except httpx.HTTPError as e:
            raise EnqueueError(f"Notification queue unreachable: {e}") from e

        # Any 2xx means the entry was accepted; the id in the body is optional
        if not response.content:
            return ""
        try:
            payload = response.json()
        except ValueError:
            logger.warning("Notification queue answered %s without a JSON body", response.status_code)
            return ""
        if not isinstance(payload, dict):
            return ""
        return str(payload.get("id", ""))

    def close(self) -> None:
        self._client.close()


def create_notification_queue(db: Session) -> NotificationQueue:
    """Queue configured for this process: HTTP when a URL is set, else the shared table."""
    if settings.NOTIFICATION_QUEUE_URL:
        return HttpNotificationQueue(
            settings.NOTIFICATION_QUEUE_URL,
            api_key=settings.NOTIFICATION_QUEUE_API_KEY,
            timeout=settings.ENQUEUE_TIMEOUT_SECONDS,
        )
    return DatabaseNotificationQueue(db)
