"""
Document lifecycle: every change to an expiry date goes through here so the
alert schedule follows it.
"""
import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from vecdoc.core.exceptions import ForbiddenException, NotFoundException
from vecdoc.core.utils import now_local, sanitize_text
from vecdoc.models.bike import Bike
from vecdoc.models.document import Document
from vecdoc.schemas.document import AlertResponse, DocumentCreate, DocumentResponse, DocumentUpdate
from vecdoc.services.alert_schedule import AlertScheduleService
from vecdoc.services.alert_store import AlertStore
from vecdoc.services.urgency import days_until_expiry

logger = logging.getLogger(__name__)


class DocumentService:
    """Document management service."""

    def __init__(self, db: Session):
        self.db = db
        self.alerts = AlertScheduleService(db)

    def _get_owned_bike(self, bike_id: str, user_id: str) -> Bike:
        bike = self.db.scalars(
            select(Bike).where(
                Bike.id == bike_id,
                Bike.user_id == user_id,
                Bike.deleted_at.is_(None),
            )
        ).first()
        if bike is None:
            raise NotFoundException("Bike", bike_id)
        return bike

    def get_by_id(self, document_id: str, user_id: Optional[str] = None) -> Document:
        """Non-deleted document; when ``user_id`` is given it must own the document."""
        document = self.db.get(Document, document_id)
        if document is None or document.deleted_at is not None:
            raise NotFoundException("Document", document_id)
        if user_id is not None and document.user_id != user_id:
            raise ForbiddenException("You do not have access to this document")
        return document

    def create(self, data: DocumentCreate) -> Document:
        """Stores the document and schedules its expiry alerts."""
        logger.info("Creating document: bike_id=%s, title=%s", data.bike_id, data.title)
        self._get_owned_bike(data.bike_id, data.user_id)

        document = Document(
            bike_id=data.bike_id,
            user_id=data.user_id,
            document_type=data.document_type,
            title=sanitize_text(data.title, max_length=200),
            description=sanitize_text(data.description),
            issue_date=data.issue_date,
            expiry_date=data.expiry_date,
        )
        self.db.add(document)
        self.db.flush()

        if document.expiry_date:
            self.alerts.schedule_alerts(document)

        logger.info("Document created: id=%s", document.id)
        return document

    def update(self, document_id: str, data: DocumentUpdate) -> Document:
        """Applies the given fields; a changed expiry date replaces the alert schedule."""
        document = self.get_by_id(document_id, data.user_id)
        changes = data.model_dump(exclude_unset=True, exclude={"user_id"})

        for field, value in changes.items():
            if field in ("title", "description"):
                value = sanitize_text(value, max_length=200 if field == "title" else 1000)
            setattr(document, field, value)
        self.db.flush()

        if "expiry_date" in changes:
            logger.info(
                "Expiry changed: document_id=%s, expiry=%s", document.id, document.expiry_date
            )
            if document.expiry_date:
                self.alerts.schedule_alerts(document)
            else:
                self.alerts.cancel_alerts(document.id)

        return document

    def delete(self, document_id: str, user_id: str) -> None:
        """Soft-deletes the document and cancels its pending alerts."""
        document = self.get_by_id(document_id, user_id)
        document.deleted_at = now_local()
        self.db.flush()
        self.alerts.cancel_alerts(document.id)
        logger.info("Document deleted: id=%s", document.id)

    def find_expiring(self, user_id: str, days: int = 30) -> list[Document]:
        """Documents expiring between today and ``days`` from now, soonest first."""
        today = now_local().date()
        return list(
            self.db.scalars(
                select(Document)
                .where(
                    Document.user_id == user_id,
                    Document.deleted_at.is_(None),
                    Document.expiry_date.is_not(None),
                    Document.expiry_date >= today,
                    Document.expiry_date <= today + timedelta(days=days),
                )
                .order_by(Document.expiry_date)
            )
        )

    def enrich(self, document: Document, include_alerts: bool = True) -> DocumentResponse:
        """Response with days until expiry and the alert schedule."""
        response = DocumentResponse.model_validate(document)
        if document.expiry_date:
            response.days_until_expiry = days_until_expiry(document.expiry_date, now_local())
        if include_alerts:
            response.alerts = [
                AlertResponse.model_validate(a)
                for a in AlertStore(self.db).list_for_document(document.id)
            ]
        return response
