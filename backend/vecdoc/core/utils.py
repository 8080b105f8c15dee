"""
Application utilities.
"""
import re
import uuid
from datetime import date, datetime
from zoneinfo import ZoneInfo

from vecdoc.core.config import settings

LOCAL_TZ = ZoneInfo(settings.TIMEZONE)


def now_local() -> datetime:
    """Current wall-clock time in the service timezone, without tzinfo.

    Stored timestamps are naive local times, so comparisons against the
    database stay naive as well.
    """
    return datetime.now(LOCAL_TZ).replace(tzinfo=None)


def today_local() -> date:
    return now_local().date()


def new_id() -> str:
    return str(uuid.uuid4())


def format_date(value: date | datetime | None) -> str:
    """Formats a date like ``18 Oct 2026``."""
    if value is None:
        return "-"
    return f"{value.day} {value.strftime('%b %Y')}"


def sanitize_text(text: str | None, max_length: int = 1000) -> str | None:
    """Strip control characters and cap the length."""
    if text is None:
        return None
    text = re.sub(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]', '', text)
    return text[:max_length].strip()
