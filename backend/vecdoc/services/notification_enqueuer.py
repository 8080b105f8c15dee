"""
Turns a due alert into a notification entry.
"""
from typing import NamedTuple

from vecdoc.core.exceptions import MalformedAlertError
from vecdoc.core.utils import format_date
from vecdoc.models.alert import AlertType, DocumentAlert
from vecdoc.models.document import Document
from vecdoc.models.notification import NotificationPriority
from vecdoc.schemas.notification import NotificationEntry

NOTIFICATION_CATEGORY = "document"


class AlertContent(NamedTuple):
    title: str
    body: str
    priority: NotificationPriority


# Templates receive: document, bike, expiry
ALERT_CONTENT: dict[AlertType, AlertContent] = {
    AlertType.THIRTY_DAY: AlertContent(
        "📄 Document Expiring Soon",
        "{document} for {bike} expires on {expiry} (30 days)",
        NotificationPriority.LOW,
    ),
    AlertType.SEVEN_DAY: AlertContent(
        "⚠️ Document Expires in 1 Week",
        "{document} for {bike} expires on {expiry}. Renew soon!",
        NotificationPriority.NORMAL,
    ),
    AlertType.ONE_DAY: AlertContent(
        "🚨 Document Expires Tomorrow!",
        "{document} for {bike} expires tomorrow. Renew immediately!",
        NotificationPriority.HIGH,
    ),
    AlertType.EXPIRED: AlertContent(
        "❌ Document Expired!",
        "{document} for {bike} has expired. Renew now to avoid penalties.",
        NotificationPriority.CRITICAL,
    ),
}

_uncovered = set(AlertType) - ALERT_CONTENT.keys()
if _uncovered:
    raise RuntimeError(f"No notification content for alert types: {sorted(t.value for t in _uncovered)}")


def build_notification(alert: DocumentAlert, document: Document, bike_name: str) -> NotificationEntry:
    """Title, body, priority and payload for one alert."""
    if document.expiry_date is None:
        raise MalformedAlertError(f"Document {document.id} has no expiry date")

    content = ALERT_CONTENT[AlertType(alert.alert_type)]
    body = content.body.format(
        document=document.title,
        bike=bike_name,
        expiry=format_date(document.expiry_date),
    )
    return NotificationEntry(
        user_id=alert.user_id,
        title=content.title,
        body=body,
        category=NOTIFICATION_CATEGORY,
        priority=content.priority,
        data={
            "type": "document_expiry",
            "alertId": alert.id,
            "documentId": document.id,
            "bikeId": document.bike_id,
            "alertType": AlertType(alert.alert_type).value,
        },
    )


def build_notification_for_document(alert: DocumentAlert, document: Document) -> NotificationEntry:
    """Same as ``build_notification``, taking the bike name from the document."""
    if document.bike is None:
        raise MalformedAlertError(f"Document {document.id} has no bike")
    return build_notification(alert, document, document.bike.display_name)
