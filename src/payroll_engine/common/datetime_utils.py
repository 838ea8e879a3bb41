from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Optional, Union

from ..core.constants import DATE_KEY_FORMAT

DateLike = Union[str, date, datetime, None]


def parse_timestamp(value: DateLike) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp (or date/datetime) into an aware UTC datetime.

    Naive values are read as UTC and a bare ``YYYY-MM-DD`` is midnight UTC.
    Returns None instead of raising when the value cannot be parsed.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time())
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text[-1] in "Zz":
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def date_key(value: DateLike) -> Optional[str]:
    """UTC calendar date of a timestamp as YYYY-MM-DD, or None if unparsable."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    return parsed.strftime(DATE_KEY_FORMAT)


def add_years(value: date, years: int) -> date:
    try:
        return value.replace(year=value.year + years)
    except ValueError:
        # 29 Feb in a non-leap target year
        return value.replace(year=value.year + years, day=28)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
