"""
Pydantic schemas for maintenance urgency.
"""
from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class MaintenanceStatus(str, Enum):
    OK = "ok"
    DUE_SOON = "due_soon"
    OVERDUE = "overdue"


class OilChangeStatus(BaseModel):
    """Distance-based oil change status."""
    status: MaintenanceStatus
    km_remaining: int
    km_since_last_change: int
    percentage_used: float
    next_change_at_km: int
    overdue_by_km: int


class MaintenanceDueStatus(BaseModel):
    """Combined distance and time status of one maintenance item."""
    status: MaintenanceStatus
    km_remaining: Optional[int] = None
    next_due_km: Optional[int] = None
    days_remaining: Optional[int] = None
    next_due_date: Optional[date] = None


class UpcomingMaintenanceItem(MaintenanceDueStatus):
    """Upcoming maintenance entry for one bike and maintenance type."""
    bike_id: str
    bike_name: str
    maintenance_type: str
    current_odometer_km: int


class UpcomingMaintenanceResponse(BaseModel):
    items: list[UpcomingMaintenanceItem]
    total: int
