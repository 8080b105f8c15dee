"""
X-API-Key guard for the /api/v1 routers.

The same header carries NOTIFICATION_QUEUE_API_KEY on calls to the delivery service.
"""
import hmac
import logging

from fastapi import HTTPException, Request, Security, status
from fastapi.security import APIKeyHeader

from vecdoc.core.config import settings

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-Key"

api_key_header = APIKeyHeader(name=API_KEY_HEADER, auto_error=False)


def verify_api_key(request: Request, api_key: str | None = Security(api_key_header)) -> str:
    """Rejects the call unless the header matches API_KEY; an unset API_KEY rejects everything."""
    expected = settings.API_KEY
    if not expected or not api_key or not hmac.compare_digest(api_key.encode(), expected.encode()):
        logger.warning("Rejected API key on %s %s", request.method, request.url.path)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API key",
        )
    return api_key
