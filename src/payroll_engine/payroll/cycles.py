"""Date-range helpers used when payroll cycles are created and named."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import DateLike, add_years, date_key, now_local, parse_timestamp
from ..core.constants import (
    BUDDHIST_ERA_OFFSET,
    MAX_CYCLE_SPAN_DAYS,
    MAX_FUTURE_YEARS,
    PAYROLL_CYCLE_PREFIX,
    THAI_MONTH_ABBREVIATIONS,
)
from ..core.enums import DateRangeError

SECONDS_PER_DAY = 86400


@dataclass(frozen=True)
class DateRangeValidation:
    is_valid: bool
    error: Optional[DateRangeError] = None

    @property
    def message(self) -> Optional[str]:
        return self.error.message if self.error else None


def is_date_range_overlapping(start_a: DateLike, end_a: DateLike, start_b: DateLike, end_b: DateLike) -> bool:
    """True when the closed ranges [start_a, end_a] and [start_b, end_b] share a day.

    Any unparsable bound means no overlap is assumed.
    """
    bounds = [parse_timestamp(v) for v in (start_a, end_a, start_b, end_b)]
    if any(b is None for b in bounds):
        return False
    s1, e1, s2, e2 = bounds
    return s1 <= e2 and s2 <= e1


def validate_date_range(start: DateLike, end: DateLike, *, today: Optional[date] = None) -> DateRangeValidation:
    if not start or not end:
        return DateRangeValidation(is_valid=False, error=DateRangeError.REQUIRED)

    start_at = parse_timestamp(start)
    end_at = parse_timestamp(end)
    if start_at is None or end_at is None:
        return DateRangeValidation(is_valid=False, error=DateRangeError.INVALID_FORMAT)

    if start_at >= end_at:
        return DateRangeValidation(is_valid=False, error=DateRangeError.START_NOT_BEFORE_END)

    span_days = (end_at - start_at).total_seconds() / SECONDS_PER_DAY
    if span_days > MAX_CYCLE_SPAN_DAYS:
        return DateRangeValidation(is_valid=False, error=DateRangeError.SPAN_TOO_LONG)

    today = today or now_local().date()
    if end_at.date() > add_years(today, MAX_FUTURE_YEARS):
        return DateRangeValidation(is_valid=False, error=DateRangeError.TOO_FAR_IN_FUTURE)

    return DateRangeValidation(is_valid=True)


def _thai_month_label(value: datetime) -> str:
    return f"{THAI_MONTH_ABBREVIATIONS[value.month - 1]} {value.year + BUDDHIST_ERA_OFFSET}"


def generate_payroll_cycle_name(start: DateLike, end: DateLike) -> str:
    """Thai label such as ``เงินเดือน ม.ค. 2568`` (Buddhist-era year)."""
    start_at = parse_timestamp(start)
    end_at = parse_timestamp(end)
    if start_at is None or end_at is None:
        return f"{PAYROLL_CYCLE_PREFIX} {start} - {end}"

    start_label = _thai_month_label(start_at)
    end_label = _thai_month_label(end_at)
    if start_label == end_label:
        return f"{PAYROLL_CYCLE_PREFIX} {start_label}"
    return f"{PAYROLL_CYCLE_PREFIX} {start_label} - {end_label}"


def format_date_for_input(value: DateLike) -> str:
    return date_key(value) or ""
