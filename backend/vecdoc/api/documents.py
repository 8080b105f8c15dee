"""
API endpoints for documents.
"""
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from vecdoc.core.database import get_db
from vecdoc.core.security import verify_api_key
from vecdoc.schemas.document import (
    DocumentCreate,
    DocumentListResponse,
    DocumentResponse,
    DocumentUpdate,
)
from vecdoc.services.document_service import DocumentService

router = APIRouter(
    prefix="/documents",
    tags=["documents"],
    dependencies=[Depends(verify_api_key)],
)


@router.post("", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
def create_document(data: DocumentCreate, db: Session = Depends(get_db)):
    """Create a document; an expiry date schedules its alerts."""
    service = DocumentService(db)
    document = service.create(data)
    return service.enrich(document)


@router.get("/expiring", response_model=DocumentListResponse)
def list_expiring_documents(
    user_id: str = Query(...),
    days: int = Query(30, ge=0, le=366),
    db: Session = Depends(get_db),
):
    """Documents expiring within the next ``days`` days."""
    service = DocumentService(db)
    documents = service.find_expiring(user_id, days=days)
    return DocumentListResponse(
        items=[service.enrich(d, include_alerts=False) for d in documents],
        total=len(documents),
    )


@router.get("/{document_id}", response_model=DocumentResponse)
def get_document(document_id: str, user_id: str = Query(...), db: Session = Depends(get_db)):
    service = DocumentService(db)
    return service.enrich(service.get_by_id(document_id, user_id))


@router.patch("/{document_id}", response_model=DocumentResponse)
def update_document(document_id: str, data: DocumentUpdate, db: Session = Depends(get_db)):
    """Update a document; a new expiry date replaces pending alerts."""
    service = DocumentService(db)
    document = service.update(document_id, data)
    return service.enrich(document)


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_document(document_id: str, user_id: str = Query(...), db: Session = Depends(get_db)):
    """Soft-delete a document and cancel its pending alerts."""
    DocumentService(db).delete(document_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
