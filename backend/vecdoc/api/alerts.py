"""
API endpoints for document alerts.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from vecdoc.core.database import get_db
from vecdoc.core.security import verify_api_key
from vecdoc.models.alert import AlertStatus
from vecdoc.schemas.document import AlertListResponse, AlertResponse, AlertTickResponse
from vecdoc.services.alert_processor import AlertProcessor
from vecdoc.services.alert_store import AlertStore
from vecdoc.services.notification_queue import create_notification_queue

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/alerts",
    tags=["alerts"],
    dependencies=[Depends(verify_api_key)],
)


@router.get("", response_model=AlertListResponse)
def list_alerts(
    document_id: str = Query(...),
    status: Optional[AlertStatus] = Query(None),
    db: Session = Depends(get_db),
):
    """Alerts of a document, earliest first."""
    alerts = AlertStore(db).list_for_document(document_id, status=status)
    return AlertListResponse(
        items=[AlertResponse.model_validate(a) for a in alerts],
        total=len(alerts),
    )


@router.post("/process", response_model=AlertTickResponse)
def process_alerts(db: Session = Depends(get_db)):
    """Run one processing tick now (for an external scheduler)."""
    queue = create_notification_queue(db)
    try:
        summary = AlertProcessor(db, queue).process_due_alerts()
    finally:
        queue.close()
    logger.info("Alert tick triggered via API: %s", summary)
    return AlertTickResponse(**summary)
