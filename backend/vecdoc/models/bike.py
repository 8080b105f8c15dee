"""
Bike model (owned by the record store, read here).
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import Integer, String, DateTime, Boolean
from sqlalchemy.orm import Mapped, mapped_column

from vecdoc.core.database import Base
from vecdoc.core.utils import now_local, new_id


class Bike(Base):
    """A user's vehicle."""
    __tablename__ = "bikes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    nickname: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    brand: Mapped[str] = mapped_column(String, nullable=False)
    model: Mapped[str] = mapped_column(String, nullable=False)
    current_odometer_km: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_oil_change_km: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_oil_change_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    oil_change_interval_km: Mapped[int] = mapped_column(Integer, nullable=False, default=2500)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=now_local)
    deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    @property
    def display_name(self) -> str:
        return self.nickname or f"{self.brand} {self.model}"
