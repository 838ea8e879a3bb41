from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..attendance.model import TimeEntry
from ..common.datetime_utils import now_local
from ..common.numbers import round_half_up, to_number
from ..common.validators import require_mapping
from ..core.constants import HOURS_DECIMAL_PLACES, MONEY_DECIMAL_PLACES
from ..core.enums import PayrollCycleStatus
from ..core.exceptions import ValidationError
from .adjustments import PayrollDetail, PayrollDetailSummary, is_net_pay_negative, summarize_payroll_details
from .calculation import calculate_employee_payroll
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import DailyOnlyPayrollCalculator, HourlyOnlyPayrollCalculator
from .cycles import format_date_for_input, generate_payroll_cycle_name, is_date_range_overlapping, validate_date_range
from .model import EmployeeRates, PayrollCalculationInput, PayrollCalculationOutput

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PayrollCycle:
    start_date: str
    end_date: str
    name: str
    status: PayrollCycleStatus = PayrollCycleStatus.ACTIVE
    cycle_id: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PayrollCycle":
        data = require_mapping(data, "cycle")
        start = data.get("start_date") or ""
        end = data.get("end_date") or ""
        try:
            status = PayrollCycleStatus(data.get("status") or PayrollCycleStatus.ACTIVE.value)
        except ValueError as exc:
            raise ValidationError(f"สถานะรอบการจ่ายเงินเดือนไม่ถูกต้อง: {data.get('status')}") from exc
        return cls(
            start_date=start,
            end_date=end,
            name=data.get("name") or generate_payroll_cycle_name(start, end),
            status=status,
            cycle_id=data.get("id"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.cycle_id,
            "name": self.name,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class EmployeeRecord:
    """Employee row as supplied by the employee store; either rate may be unset."""

    user_id: str
    full_name: str
    hourly_rate: Optional[float] = None
    daily_rate: Optional[float] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "EmployeeRecord":
        data = require_mapping(data, "employees[]")
        return cls(
            user_id=str(data.get("id") or data.get("user_id") or ""),
            full_name=data.get("full_name") or "",
            hourly_rate=data.get("hourly_rate"),
            daily_rate=data.get("daily_rate"),
        )

    @property
    def has_rates(self) -> bool:
        return self.hourly_rate is not None or self.daily_rate is not None

    def rates(self) -> EmployeeRates:
        return EmployeeRates(hourly_rate=to_number(self.hourly_rate), daily_rate=to_number(self.daily_rate))


@dataclass(frozen=True)
class EmployeeTimeEntry:
    user_id: str
    entry: TimeEntry

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "EmployeeTimeEntry":
        data = require_mapping(data, "time_entries[]")
        return cls(user_id=str(data.get("user_id") or ""), entry=TimeEntry.from_mapping(data))


@dataclass(frozen=True)
class EmployeePayrollLine:
    user_id: str
    full_name: str
    result: PayrollCalculationOutput

    def to_dict(self) -> dict:
        return {"user_id": self.user_id, "full_name": self.full_name, **self.result.to_dict()}


@dataclass(frozen=True)
class CycleCalculation:
    cycle: PayrollCycle
    lines: list[EmployeePayrollLine]
    total_employees: int
    total_hours: float
    total_base_pay: float

    def to_dict(self) -> dict:
        return {
            "cycle": self.cycle.to_dict(),
            "employees": [line.to_dict() for line in self.lines],
            "total_employees": self.total_employees,
            "total_hours": self.total_hours,
            "total_base_pay": self.total_base_pay,
        }


@dataclass(frozen=True)
class CycleFinalization:
    cycle: PayrollCycle
    summary: PayrollDetailSummary
    finalized_at: datetime

    def to_dict(self) -> dict:
        return {
            "cycle": {**self.cycle.to_dict(), "finalized_at": self.finalized_at.isoformat()},
            "totals": self.summary.to_dict(),
        }


def _has_negative_net_pay(detail: PayrollDetail) -> bool:
    if detail.net_pay is None:
        return False
    if detail.net_pay < 0:
        return True
    return detail.base_pay is not None and is_net_pay_negative(
        detail.base_pay, detail.overtime_pay, detail.bonus, detail.deduction
    )


class PayrollCycleService:
    def prepare_cycle(
        self,
        *,
        start_date: str,
        end_date: str,
        existing: Iterable[PayrollCycle] = (),
        name: Optional[str] = None,
    ) -> PayrollCycle:
        """Check a new cycle's range and return it ready to be stored."""
        validation = validate_date_range(start_date, end_date)
        if not validation.is_valid:
            raise ValidationError(validation.message)

        for other in existing:
            if is_date_range_overlapping(start_date, end_date, other.start_date, other.end_date):
                raise ValidationError(f"ช่วงวันที่ทับซ้อนกับรอบการจ่ายเงินเดือน {other.name}")

        return PayrollCycle(
            start_date=format_date_for_input(start_date),
            end_date=format_date_for_input(end_date),
            name=(name or "").strip() or generate_payroll_cycle_name(start_date, end_date),
        )

    def finalize_cycle(
        self,
        *,
        cycle: PayrollCycle,
        details: Sequence[PayrollDetail],
        finalized_at: Optional[datetime] = None,
    ) -> CycleFinalization:
        """Close an active cycle once every payroll line is complete and non-negative.

        Returns the cycle marked completed together with the cycle totals.
        """
        if cycle.status == PayrollCycleStatus.COMPLETED:
            raise ValidationError("รอบการจ่ายเงินเดือนนี้ได้ถูกปิดแล้ว")

        negative = [d for d in details if _has_negative_net_pay(d)]
        if negative:
            logger.warning(
                "Cycle %s not finalized, negative net pay for %s",
                cycle.name,
                ", ".join(d.full_name or d.user_id or "?" for d in negative),
            )
            raise ValidationError("ไม่สามารถปิดรอบได้ เนื่องจากมีพนักงานที่มีเงินเดือนสุทธิติดลบ")

        incomplete = [d for d in details if not d.is_complete]
        if incomplete:
            logger.warning("Cycle %s not finalized, %d incomplete payroll lines", cycle.name, len(incomplete))
            raise ValidationError("ไม่สามารถปิดรอบได้ เนื่องจากมีพนักงานที่ข้อมูลไม่ครบถ้วน")

        summary = summarize_payroll_details(details)
        finalized_at = finalized_at or now_local()
        logger.info(
            "Finalized payroll cycle %s: %d employees, net pay %.2f",
            cycle.name,
            summary.total_employees,
            summary.total_net_pay,
        )
        return CycleFinalization(
            cycle=replace(cycle, status=PayrollCycleStatus.COMPLETED),
            summary=summary,
            finalized_at=finalized_at,
        )


class PayrollService:
    def __init__(self, *, calculator: Optional[PayrollCalculator] = None):
        self._calculator = calculator

    def _calculator_for(self, employee: EmployeeRecord) -> Optional[PayrollCalculator]:
        # an employee with a single configured rate is paid by that rate only
        if employee.hourly_rate is None:
            return DailyOnlyPayrollCalculator()
        if employee.daily_rate is None:
            return HourlyOnlyPayrollCalculator()
        return self._calculator

    def calculate_cycle(
        self,
        *,
        cycle: PayrollCycle,
        employees: Sequence[EmployeeRecord],
        time_entries: Iterable[EmployeeTimeEntry],
    ) -> CycleCalculation:
        if cycle.status != PayrollCycleStatus.ACTIVE:
            raise ValidationError(
                f"รอบการจ่ายเงินเดือนนี้ไม่สามารถคำนวณได้ - สถานะปัจจุบัน: {cycle.status.value} (ต้องเป็น active)"
            )

        entries_by_user: dict[str, list[TimeEntry]] = defaultdict(list)
        for item in time_entries:
            entries_by_user[item.user_id].append(item.entry)

        lines: list[EmployeePayrollLine] = []
        for employee in employees:
            if not employee.has_rates:
                logger.warning("No rate configured for employee %s (%s), skipped", employee.full_name, employee.user_id)
                continue

            result = calculate_employee_payroll(
                PayrollCalculationInput(
                    employee_rates=employee.rates(),
                    time_entries=tuple(entries_by_user.get(employee.user_id, ())),
                    period_start=cycle.start_date,
                    period_end=cycle.end_date,
                ),
                calculator=self._calculator_for(employee),
            )
            lines.append(EmployeePayrollLine(user_id=employee.user_id, full_name=employee.full_name, result=result))

        lines.sort(key=lambda line: line.full_name)
        total_hours = round_half_up(sum(line.result.total_hours for line in lines), HOURS_DECIMAL_PLACES)
        total_base_pay = round_half_up(sum(line.result.base_pay for line in lines), MONEY_DECIMAL_PLACES)

        logger.info(
            "Calculated payroll cycle %s: %d employees, %.2f hours, base pay %.2f",
            cycle.name,
            len(lines),
            total_hours,
            total_base_pay,
        )
        return CycleCalculation(
            cycle=cycle,
            lines=lines,
            total_employees=len(lines),
            total_hours=total_hours,
            total_base_pay=total_base_pay,
        )
