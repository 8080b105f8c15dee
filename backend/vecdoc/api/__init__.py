"""
API endpoints.
"""
from fastapi import APIRouter

from vecdoc.api import alerts, documents, maintenance, notifications

# Main API router
api_router = APIRouter(prefix="/api/v1")

api_router.include_router(documents.router)
api_router.include_router(alerts.router)
api_router.include_router(notifications.router)
api_router.include_router(maintenance.router)

__all__ = ["api_router"]
