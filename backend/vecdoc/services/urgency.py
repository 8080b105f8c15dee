"""
Urgency calculations: days until a document expires and maintenance due status.

Everything here is pure: callers pass ``now``/``today`` explicitly.
"""
import math
from datetime import date, datetime, time, timedelta
from typing import Optional

from vecdoc.schemas.maintenance import MaintenanceDueStatus, MaintenanceStatus, OilChangeStatus

SECONDS_PER_DAY = 24 * 60 * 60

# Remaining distance at or below which maintenance is due soon
DUE_SOON_KM = 250
# Remaining days at or below which date-based maintenance is due soon
DUE_SOON_DAYS = 7

_SEVERITY = {
    MaintenanceStatus.OK: 0,
    MaintenanceStatus.DUE_SOON: 1,
    MaintenanceStatus.OVERDUE: 2,
}


def days_until_expiry(expiry_date: date | datetime, now: datetime) -> int:
    """Whole days from ``now`` until the start of the expiry date, rounded up.

    Negative once the document has expired.
    """
    if not isinstance(expiry_date, datetime):
        expiry_date = datetime.combine(expiry_date, time.min)
    seconds = (expiry_date - now).total_seconds()
    return math.ceil(seconds / SECONDS_PER_DAY)


def _distance_status(km_remaining: int) -> MaintenanceStatus:
    if km_remaining <= 0:
        return MaintenanceStatus.OVERDUE
    if km_remaining <= DUE_SOON_KM:
        return MaintenanceStatus.DUE_SOON
    return MaintenanceStatus.OK


def _date_status(days_remaining: int) -> MaintenanceStatus:
    if days_remaining <= 0:
        return MaintenanceStatus.OVERDUE
    if days_remaining <= DUE_SOON_DAYS:
        return MaintenanceStatus.DUE_SOON
    return MaintenanceStatus.OK


def oil_change_status(current_odometer_km: int, last_change_km: int, interval_km: int) -> OilChangeStatus:
    """Oil change status from odometer readings.

    ``interval_km`` must be positive; it is validated where the interval is configured.
    """
    km_since_change = current_odometer_km - last_change_km
    raw_remaining = interval_km - km_since_change
    percentage_used = min(100.0, max(0.0, km_since_change / interval_km * 100))

    return OilChangeStatus(
        status=_distance_status(raw_remaining),
        km_remaining=max(0, raw_remaining),
        km_since_last_change=km_since_change,
        percentage_used=round(percentage_used, 2),
        next_change_at_km=last_change_km + interval_km,
        overdue_by_km=abs(min(0, raw_remaining)),
    )


def maintenance_due_status(
    current_odometer_km: int,
    last_service_km: int,
    today: date,
    interval_km: Optional[int] = None,
    last_service_date: Optional[date] = None,
    interval_days: Optional[int] = None,
) -> MaintenanceDueStatus:
    """Combined distance/time status; the more severe rule wins."""
    status = MaintenanceStatus.OK
    km_remaining = next_due_km = None
    days_remaining = next_due_date = None

    if interval_km:
        next_due_km = last_service_km + interval_km
        km_remaining = next_due_km - current_odometer_km
        status = _distance_status(km_remaining)

    if interval_days and last_service_date is not None:
        next_due_date = last_service_date + timedelta(days=interval_days)
        days_remaining = (next_due_date - today).days
        by_date = _date_status(days_remaining)
        if _SEVERITY[by_date] > _SEVERITY[status]:
            status = by_date

    return MaintenanceDueStatus(
        status=status,
        km_remaining=km_remaining,
        next_due_km=next_due_km,
        days_remaining=days_remaining,
        next_due_date=next_due_date,
    )
