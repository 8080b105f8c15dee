"""
SQLAlchemy models; import all of them so relationships register.
"""
from vecdoc.models.bike import Bike  # noqa: F401
from vecdoc.models.document import Document, DocumentType  # noqa: F401
from vecdoc.models.alert import AlertStatus, AlertType, DocumentAlert  # noqa: F401
from vecdoc.models.notification import (  # noqa: F401
    NotificationPriority,
    NotificationQueueEntry,
    NotificationSettings,
    NotificationStatus,
)
from vecdoc.models.maintenance import MaintenanceRecord, MaintenanceSchedule  # noqa: F401
