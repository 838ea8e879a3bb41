"""Resolve attendance sessions into worked hours and bucket them by day."""
from __future__ import annotations

import logging
from typing import Iterable

from ..common.datetime_utils import DateLike, date_key, parse_timestamp
from ..common.numbers import round_half_up
from ..core.constants import HOURS_DECIMAL_PLACES
from ..core.enums import IntervalStatus
from .model import ParsedInterval, TimeEntry

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = 3600


def calculate_hours_worked(check_in: DateLike, check_out: DateLike) -> float:
    """Hours between two instants, rounded to 2 places.

    Returns 0 when either value is unparsable or check-out is not after
    check-in. Offsets are applied before differencing, so cross-midnight and
    ``+07:00`` style inputs need no special handling.
    """
    start = parse_timestamp(check_in)
    end = parse_timestamp(check_out)
    if start is None or end is None:
        return 0
    if end <= start:
        return 0
    hours = (end - start).total_seconds() / SECONDS_PER_HOUR
    return round_half_up(hours, HOURS_DECIMAL_PLACES)


def resolve_interval(entry: TimeEntry) -> ParsedInterval:
    day = date_key(entry.check_in_time)
    if day is None:
        return ParsedInterval(status=IntervalStatus.INVALID)
    if entry.is_open:
        return ParsedInterval(status=IntervalStatus.OPEN, date=day)
    if parse_timestamp(entry.check_out_time) is None:
        return ParsedInterval(status=IntervalStatus.INVALID, date=day)
    hours = calculate_hours_worked(entry.check_in_time, entry.check_out_time)
    return ParsedInterval(status=IntervalStatus.VALID, hours=hours, date=day)


def group_time_entries_by_date(entries: Iterable[TimeEntry]) -> dict[str, list[TimeEntry]]:
    """Bucket entries by the UTC date of their check-in (check-out may spill over)."""
    grouped: dict[str, list[TimeEntry]] = {}
    for entry in entries:
        day = date_key(entry.check_in_time)
        if day is None:
            logger.warning("Skipping time entry with unparsable check-in %r", entry.check_in_time)
            continue
        grouped.setdefault(day, []).append(entry)
    return grouped
