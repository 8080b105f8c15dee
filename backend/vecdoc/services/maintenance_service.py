"""
Maintenance urgency for a user's bikes.
"""
import logging
from datetime import date
from typing import Optional

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from vecdoc.core.exceptions import NotFoundException
from vecdoc.core.utils import today_local
from vecdoc.models.bike import Bike
from vecdoc.models.maintenance import MaintenanceRecord, MaintenanceSchedule
from vecdoc.schemas.maintenance import OilChangeStatus, UpcomingMaintenanceItem
from vecdoc.services.urgency import maintenance_due_status, oil_change_status

logger = logging.getLogger(__name__)


class MaintenanceService:
    """Maintenance due calculations over stored bikes and schedules."""

    def __init__(self, db: Session):
        self.db = db

    def get_bike(self, bike_id: str) -> Bike:
        bike = self.db.get(Bike, bike_id)
        if bike is None or bike.deleted_at is not None:
            raise NotFoundException("Bike", bike_id)
        return bike

    def get_oil_change_status(self, bike_id: str) -> OilChangeStatus:
        bike = self.get_bike(bike_id)
        return oil_change_status(
            bike.current_odometer_km,
            bike.last_oil_change_km,
            bike.oil_change_interval_km,
        )

    def _last_records(self, bike_id: str) -> dict[str, MaintenanceRecord]:
        """Most recent record per maintenance type."""
        records = self.db.scalars(
            select(MaintenanceRecord)
            .where(MaintenanceRecord.bike_id == bike_id)
            .order_by(desc(MaintenanceRecord.performed_at))
        )
        latest: dict[str, MaintenanceRecord] = {}
        for record in records:
            latest.setdefault(record.maintenance_type, record)
        return latest

    def get_upcoming(self, user_id: str, today: Optional[date] = None) -> list[UpcomingMaintenanceItem]:
        """
        Upcoming maintenance of every active bike, most urgent first.
        Items without a distance interval sort last.
        """
        today = today or today_local()
        bikes = self.db.scalars(
            select(Bike).where(
                Bike.user_id == user_id,
                Bike.deleted_at.is_(None),
                Bike.is_active.is_(True),
            )
        ).all()

        upcoming = []
        for bike in bikes:
            last_records = self._last_records(bike.id)
            schedules = self.db.scalars(
                select(MaintenanceSchedule).where(
                    MaintenanceSchedule.bike_id == bike.id,
                    MaintenanceSchedule.is_enabled.is_(True),
                )
            )
            for schedule in schedules:
                last = last_records.get(schedule.maintenance_type)
                due = maintenance_due_status(
                    current_odometer_km=bike.current_odometer_km,
                    last_service_km=last.odometer_at_maintenance if last else 0,
                    today=today,
                    interval_km=schedule.interval_km,
                    last_service_date=last.performed_at.date() if last else None,
                    interval_days=schedule.interval_days,
                )
                upcoming.append(
                    UpcomingMaintenanceItem(
                        bike_id=bike.id,
                        bike_name=bike.display_name,
                        maintenance_type=schedule.maintenance_type,
                        current_odometer_km=bike.current_odometer_km,
                        **due.model_dump(),
                    )
                )

        upcoming.sort(key=lambda item: (item.km_remaining is None, item.km_remaining or 0))
        return upcoming
