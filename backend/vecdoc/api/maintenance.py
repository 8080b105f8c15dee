"""
API endpoints for maintenance urgency.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from vecdoc.core.database import get_db
from vecdoc.core.security import verify_api_key
from vecdoc.schemas.maintenance import OilChangeStatus, UpcomingMaintenanceResponse
from vecdoc.services.maintenance_service import MaintenanceService

router = APIRouter(
    tags=["maintenance"],
    dependencies=[Depends(verify_api_key)],
)


@router.get("/bikes/{bike_id}/oil-change-status", response_model=OilChangeStatus)
def get_oil_change_status(bike_id: str, db: Session = Depends(get_db)):
    return MaintenanceService(db).get_oil_change_status(bike_id)


@router.get("/maintenance/upcoming", response_model=UpcomingMaintenanceResponse)
def get_upcoming_maintenance(user_id: str = Query(...), db: Session = Depends(get_db)):
    """Upcoming maintenance across the user's bikes, most urgent first."""
    items = MaintenanceService(db).get_upcoming(user_id)
    return UpcomingMaintenanceResponse(items=items, total=len(items))
