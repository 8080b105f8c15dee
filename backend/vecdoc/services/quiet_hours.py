"""
Quiet hours: a daily window in which reminders are held back.
"""
from datetime import datetime, time, timedelta
from typing import Optional


def parse_time_of_day(value: str) -> time:
    """Parses ``HH:MM``."""
    hour, minute = (int(part) for part in value.split(":"))
    return time(hour=hour, minute=minute)


def _minute_of_day(value: time) -> int:
    return value.hour * 60 + value.minute


def is_quiet_time(moment: time, start: time, end: time) -> bool:
    """Whether ``moment`` falls in the window, both ends inclusive.

    ``start > end`` means the window wraps past midnight.
    """
    current = _minute_of_day(moment)
    start_minute = _minute_of_day(start)
    end_minute = _minute_of_day(end)

    if start_minute <= end_minute:
        return start_minute <= current <= end_minute
    return current >= start_minute or current <= end_minute


def next_delivery_time(now: datetime, end: time) -> datetime:
    """One minute past the end of the window, on the next day if that moment has passed."""
    candidate = datetime.combine(now.date(), end) + timedelta(minutes=1)
    if candidate <= now:
        candidate += timedelta(days=1)
    return candidate


def quiet_window(start: Optional[str], end: Optional[str]) -> Optional[tuple[time, time]]:
    """Parsed window, or None unless both ends are configured."""
    if not start or not end:
        return None
    return parse_time_of_day(start), parse_time_of_day(end)


def deferral_target(now: datetime, start: Optional[str], end: Optional[str]) -> Optional[datetime]:
    """When a reminder due at ``now`` should be sent instead, or None if ``now`` is not quiet."""
    window = quiet_window(start, end)
    if window is None:
        return None
    quiet_start, quiet_end = window
    if not is_quiet_time(now.time(), quiet_start, quiet_end):
        return None
    return next_delivery_time(now, quiet_end)
