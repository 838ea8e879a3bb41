from __future__ import annotations

from typing import Optional

from ...common.numbers import round_half_up
from ...core.constants import DAILY_RATE_THRESHOLD_HOURS, MONEY_DECIMAL_PLACES
from ...core.enums import CalculationMethod
from ..model import DayCalculation, EmployeeRates
from .base import PayrollCalculator


def _hourly(date: Optional[str], hours: float, rates: EmployeeRates) -> DayCalculation:
    pay = round_half_up(hours * rates.hourly_rate, MONEY_DECIMAL_PLACES)
    return DayCalculation(date=date, hours=hours, method=CalculationMethod.HOURLY, pay=pay)


def _daily(date: Optional[str], hours: float, rates: EmployeeRates) -> DayCalculation:
    pay = round_half_up(rates.daily_rate, MONEY_DECIMAL_PLACES)
    return DayCalculation(date=date, hours=hours, method=CalculationMethod.DAILY, pay=pay)


class ThresholdPayrollCalculator(PayrollCalculator):
    """Standard rule: up to 12 h is paid per hour, anything above 12 h earns the flat daily rate."""

    def day_pay(self, *, date: Optional[str], hours: float, rates: EmployeeRates) -> DayCalculation:
        if hours > DAILY_RATE_THRESHOLD_HOURS:
            return _daily(date, hours, rates)
        return _hourly(date, hours, rates)


class HourlyOnlyPayrollCalculator(PayrollCalculator):
    """For employees with no daily rate configured: every day is paid per hour."""

    def day_pay(self, *, date: Optional[str], hours: float, rates: EmployeeRates) -> DayCalculation:
        return _hourly(date, hours, rates)


class DailyOnlyPayrollCalculator(PayrollCalculator):
    """For employees with no hourly rate configured: every worked day earns the daily rate."""

    def day_pay(self, *, date: Optional[str], hours: float, rates: EmployeeRates) -> DayCalculation:
        return _daily(date, hours, rates)
