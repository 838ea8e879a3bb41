from __future__ import annotations

from dataclasses import dataclass

from .payroll.calculator.base import PayrollCalculator
from .payroll.calculator.standard_calculator import ThresholdPayrollCalculator
from .payroll.service import PayrollCycleService, PayrollService


@dataclass(frozen=True)
class Container:
    calculator: PayrollCalculator

    payroll_service: PayrollService
    payroll_cycle_service: PayrollCycleService


def build_container() -> Container:
    calculator = ThresholdPayrollCalculator()

    payroll_service = PayrollService(calculator=calculator)
    payroll_cycle_service = PayrollCycleService()

    return Container(
        calculator=calculator,
        payroll_service=payroll_service,
        payroll_cycle_service=payroll_cycle_service,
    )
