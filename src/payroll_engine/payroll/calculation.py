"""Day and period payroll calculation.

Everything here is a pure function of its arguments: bad attendance records
resolve to zero hours or are skipped, they never abort a payroll run.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from ..attendance.intervals import group_time_entries_by_date, resolve_interval
from ..attendance.model import ParsedInterval, TimeEntry
from ..common.datetime_utils import date_key
from ..common.numbers import round_half_up
from ..core.constants import HOURS_DECIMAL_PLACES, MONEY_DECIMAL_PLACES
from ..core.enums import CalculationMethod
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import ThresholdPayrollCalculator
from .model import DayCalculation, EmployeeRates, PayrollCalculationInput, PayrollCalculationOutput

logger = logging.getLogger(__name__)

_DEFAULT_CALCULATOR = ThresholdPayrollCalculator()


def _price_day(
    intervals: Sequence[ParsedInterval],
    employee_rates: EmployeeRates,
    calculator: PayrollCalculator,
) -> DayCalculation:
    day = next((i.date for i in intervals if i.date is not None), None)
    total = sum(i.hours for i in intervals if i.is_valid)
    hours = round_half_up(total, HOURS_DECIMAL_PLACES)
    return calculator.day_pay(date=day, hours=hours, rates=employee_rates)


def calculate_day_pay(
    day_entries: Sequence[TimeEntry],
    employee_rates: EmployeeRates,
    *,
    calculator: Optional[PayrollCalculator] = None,
) -> DayCalculation:
    """Pay for one calendar day.

    Open sessions are left out entirely. The day's hours are summed and
    rounded before the calculator picks hourly or daily pay.
    """
    intervals = [resolve_interval(entry) for entry in day_entries]
    return _price_day(intervals, employee_rates, calculator or _DEFAULT_CALCULATOR)


def classify_calculation_method(days: Iterable[DayCalculation]) -> CalculationMethod:
    methods = {d.method for d in days}
    if methods == {CalculationMethod.DAILY}:
        return CalculationMethod.DAILY
    if len(methods) > 1:
        return CalculationMethod.MIXED
    return CalculationMethod.HOURLY


def filter_entries_in_period(entries: Iterable[TimeEntry], period_start: str, period_end: str) -> list[TimeEntry]:
    """Entries whose check-in date falls in [period_start, period_end], both inclusive."""
    start = date_key(period_start)
    end = date_key(period_end)
    if start is None or end is None:
        logger.warning("Unparsable payroll period %r - %r, no entries selected", period_start, period_end)
        return []

    selected = []
    for entry in entries:
        day = date_key(entry.check_in_time)
        if day is not None and start <= day <= end:
            selected.append(entry)
    return selected


def calculate_employee_payroll(
    payroll_input: PayrollCalculationInput,
    *,
    calculator: Optional[PayrollCalculator] = None,
) -> PayrollCalculationOutput:
    period_entries = filter_entries_in_period(
        payroll_input.time_entries,
        payroll_input.period_start,
        payroll_input.period_end,
    )
    entries_by_date = group_time_entries_by_date(period_entries)

    calculator = calculator or _DEFAULT_CALCULATOR

    breakdown: list[DayCalculation] = []
    for _day, day_entries in sorted(entries_by_date.items()):
        intervals = [resolve_interval(entry) for entry in day_entries]
        # days holding only open or zero-length sessions are not worked days
        if not any(i.is_valid and i.hours > 0 for i in intervals):
            continue
        breakdown.append(_price_day(intervals, payroll_input.employee_rates, calculator))

    total_hours = sum(d.hours for d in breakdown)
    base_pay = sum(d.pay for d in breakdown)

    return PayrollCalculationOutput(
        total_hours=round_half_up(total_hours, HOURS_DECIMAL_PLACES),
        total_days_worked=len(breakdown),
        base_pay=round_half_up(base_pay, MONEY_DECIMAL_PLACES),
        calculation_method=classify_calculation_method(breakdown),
        daily_breakdown=tuple(breakdown),
    )
