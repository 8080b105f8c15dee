"""
Maintenance schedules and performed maintenance.
"""
from datetime import date, datetime
from typing import Optional

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from vecdoc.core.database import Base
from vecdoc.core.utils import now_local, new_id


class MaintenanceSchedule(Base):
    """Recurring maintenance interval for a bike."""
    __tablename__ = "maintenance_schedules"
    __table_args__ = (
        UniqueConstraint("bike_id", "maintenance_type", name="uq_maintenance_schedule_bike_type"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    bike_id: Mapped[str] = mapped_column(ForeignKey("bikes.id"), nullable=False, index=True)
    maintenance_type: Mapped[str] = mapped_column(String, nullable=False)  # oil_change, chain_lubrication, ...
    interval_km: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    interval_days: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    is_enabled: Mapped[bool] = mapped_column(Boolean, default=True)


class MaintenanceRecord(Base):
    """Maintenance performed on a bike."""
    __tablename__ = "maintenance_records"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    bike_id: Mapped[str] = mapped_column(ForeignKey("bikes.id"), nullable=False, index=True)
    maintenance_type: Mapped[str] = mapped_column(String, nullable=False)
    odometer_at_maintenance: Mapped[int] = mapped_column(Integer, nullable=False)
    performed_at: Mapped[datetime] = mapped_column(DateTime, default=now_local)
    next_due_km: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    next_due_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
