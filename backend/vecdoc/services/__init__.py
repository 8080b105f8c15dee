"""
Service layer: business logic over an explicitly passed session.
"""
from vecdoc.services.alert_processor import AlertProcessor
from vecdoc.services.alert_schedule import AlertScheduleService
from vecdoc.services.alert_store import AlertStore
from vecdoc.services.document_service import DocumentService
from vecdoc.services.maintenance_service import MaintenanceService
from vecdoc.services.notification_settings_service import NotificationSettingsService

__all__ = [
    "AlertProcessor",
    "AlertScheduleService",
    "AlertStore",
    "DocumentService",
    "MaintenanceService",
    "NotificationSettingsService",
]
