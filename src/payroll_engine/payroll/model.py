from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

from ..attendance.model import TimeEntry
from ..common.numbers import to_number
from ..common.validators import require_list, require_mapping
from ..core.enums import CalculationMethod


@dataclass(frozen=True)
class EmployeeRates:
    """Wage policy of one employee. Not validated: zero/negative rates are paid as-is."""

    hourly_rate: float
    daily_rate: float

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "EmployeeRates":
        data = require_mapping(data, "employee_rates")
        return cls(
            hourly_rate=to_number(data.get("hourly_rate")),
            daily_rate=to_number(data.get("daily_rate")),
        )


@dataclass(frozen=True)
class DayCalculation:
    date: Optional[str]
    hours: float
    method: CalculationMethod
    pay: float

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "hours": self.hours,
            "method": self.method.value,
            "pay": self.pay,
        }


@dataclass(frozen=True)
class PayrollCalculationInput:
    employee_rates: EmployeeRates
    time_entries: Sequence[TimeEntry]
    period_start: str
    period_end: str

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PayrollCalculationInput":
        data = require_mapping(data, "payload")
        return cls(
            employee_rates=EmployeeRates.from_mapping(data.get("employee_rates") or {}),
            time_entries=tuple(
                TimeEntry.from_mapping(e) for e in require_list(data.get("time_entries"), "time_entries")
            ),
            period_start=data.get("period_start") or "",
            period_end=data.get("period_end") or "",
        )


@dataclass(frozen=True)
class PayrollCalculationOutput:
    """Per-employee, per-period result.

    ``base_pay`` and ``total_hours`` are the sums of the daily breakdown,
    which is ordered by date.
    """

    total_hours: float
    total_days_worked: int
    base_pay: float
    calculation_method: CalculationMethod
    daily_breakdown: tuple[DayCalculation, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "totalHours": self.total_hours,
            "totalDaysWorked": self.total_days_worked,
            "basePay": self.base_pay,
            "calculationMethod": self.calculation_method.value,
            "dailyBreakdown": [d.to_dict() for d in self.daily_breakdown],
        }
