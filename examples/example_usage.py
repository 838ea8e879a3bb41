"""Example: run a payroll calculation through the service layer (no Flask).

Controllers are a thin layer; the payroll rules live in plain functions and services.
"""

from payroll_engine.container import build_container
from payroll_engine.payroll.adjustments import PayrollDetail
from payroll_engine.payroll.calculation import calculate_employee_payroll
from payroll_engine.payroll.model import PayrollCalculationInput
from payroll_engine.payroll.service import EmployeeRecord, EmployeeTimeEntry


def main():
    payroll_input = PayrollCalculationInput.from_mapping(
        {
            "employee_rates": {"hourly_rate": 50, "daily_rate": 600},
            "time_entries": [
                {"check_in_time": "2025-01-15T08:00:00+07:00", "check_out_time": "2025-01-15T17:00:00+07:00"},
                {"check_in_time": "2025-01-16T06:00:00+07:00", "check_out_time": "2025-01-16T19:30:00+07:00"},
                {"check_in_time": "2025-01-17T08:00:00+07:00", "check_out_time": None},
            ],
            "period_start": "2025-01-01",
            "period_end": "2025-01-31",
        }
    )
    print(calculate_employee_payroll(payroll_input).to_dict())

    container = build_container()
    cycle = container.payroll_cycle_service.prepare_cycle(start_date="2025-01-01", end_date="2025-01-31")
    calculation = container.payroll_service.calculate_cycle(
        cycle=cycle,
        employees=[EmployeeRecord(user_id="u1", full_name="สมชาย ใจดี", hourly_rate=50, daily_rate=600)],
        time_entries=[
            EmployeeTimeEntry.from_mapping(
                {"user_id": "u1", "check_in_time": "2025-01-15T08:00:00Z", "check_out_time": "2025-01-15T16:00:00Z"}
            )
        ],
    )
    print(calculation.to_dict())

    details = [
        PayrollDetail(
            user_id=line.user_id,
            full_name=line.full_name,
            base_pay=line.result.base_pay,
            net_pay=line.result.base_pay,
        )
        for line in calculation.lines
    ]
    print(container.payroll_cycle_service.finalize_cycle(cycle=cycle, details=details).to_dict())


if __name__ == "__main__":
    main()
