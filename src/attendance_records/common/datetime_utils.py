from __future__ import annotations

from datetime import datetime, timezone, tzinfo

from ..core.constants import DISPLAY_TIME_FORMAT


def to_storage_precision(value: datetime) -> datetime:
    """Normalize a timestamp to UTC with millisecond precision.

    MongoDB keeps milliseconds only; trimming up front keeps the record we
    return identical to the one read back later. Naive values are taken as UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def now_utc() -> datetime:
    """Current UTC time at storage precision.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return to_storage_precision(datetime.now(timezone.utc))


def format_display(value: datetime, tz: tzinfo, label: str = "IST") -> str:
    """Render a stored timestamp as ``YYYY-MM-DD HH:MM:SS <label>`` in ``tz``."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return f"{value.astimezone(tz).strftime(DISPLAY_TIME_FORMAT)} {label}"
