from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.numbers import to_number
from ..common.validators import require_list
from ..container import Container
from ..core.exceptions import DomainError
from .adjustments import (
    AdjustmentValues,
    PayrollDetail,
    calculate_net_pay,
    create_changes_summary,
    low_net_pay_warning,
)
from .calculation import calculate_employee_payroll
from .cycles import generate_payroll_cycle_name, validate_date_range
from .model import PayrollCalculationInput
from .service import EmployeeRecord, EmployeeTimeEntry, PayrollCycle

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _json_body() -> dict:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise DomainError("ข้อมูลที่ส่งมาไม่ถูกต้อง (ต้องเป็น JSON object)")
        return data

    def _error(message: str, status: int):
        return jsonify({"success": False, "error": message}), status

    @app.route("/api/payroll/calculate", methods=["POST"], endpoint="api_payroll_calculate")
    def api_payroll_calculate():
        """Single employee, single period: rates + time entries in, payroll result out."""
        try:
            payroll_input = PayrollCalculationInput.from_mapping(_json_body())
        except DomainError as e:
            return _error(str(e), 400)

        result = calculate_employee_payroll(payroll_input, calculator=container.calculator)
        return jsonify({"success": True, "data": result.to_dict()}), 200

    @app.route("/api/payroll/cycles/validate", methods=["POST"], endpoint="api_payroll_cycles_validate")
    def api_payroll_cycles_validate():
        try:
            data = _json_body()
            start = data.get("start_date") or ""
            end = data.get("end_date") or ""
            existing_cycles = require_list(data.get("existing_cycles"), "existing_cycles")
            existing = [PayrollCycle.from_mapping(c) for c in existing_cycles]

            validation = validate_date_range(start, end)
            if not validation.is_valid:
                return jsonify({
                    "success": False,
                    "is_valid": False,
                    "error": validation.error.value,
                    "message": validation.message,
                    "name": generate_payroll_cycle_name(start, end),
                }), 400

            cycle = container.payroll_cycle_service.prepare_cycle(
                start_date=start,
                end_date=end,
                existing=existing,
                name=data.get("name"),
            )
        except DomainError as e:
            return _error(str(e), 400)

        return jsonify({
            "success": True,
            "is_valid": True,
            "error": None,
            "message": None,
            "name": cycle.name,
            "cycle": cycle.to_dict(),
        }), 200

    @app.route("/api/payroll/cycles/calculate", methods=["POST"], endpoint="api_payroll_cycles_calculate")
    def api_payroll_cycles_calculate():
        try:
            data = _json_body()
            cycle = PayrollCycle.from_mapping(data.get("cycle") or {})
            employees = [EmployeeRecord.from_mapping(e) for e in require_list(data.get("employees"), "employees")]
            entries = [
                EmployeeTimeEntry.from_mapping(e) for e in require_list(data.get("time_entries"), "time_entries")
            ]

            if not any(e.has_rates for e in employees):
                return _error("ไม่พบพนักงานที่มีข้อมูลค่าแรงสำหรับการคำนวณ", 400)

            calculation = container.payroll_service.calculate_cycle(
                cycle=cycle,
                employees=employees,
                time_entries=entries,
            )
        except DomainError as e:
            return _error(str(e), 400)
        except Exception:
            logger.exception("Payroll cycle calculation failed")
            return _error("เกิดข้อผิดพลาดในการคำนวณเงินเดือน", 500)

        return jsonify({"success": True, "data": calculation.to_dict()}), 200

    @app.route("/api/payroll/net-pay", methods=["POST"], endpoint="api_payroll_net_pay")
    def api_payroll_net_pay():
        try:
            data = _json_body()
        except DomainError as e:
            return _error(str(e), 400)

        base_pay = to_number(data.get("base_pay"))
        net = calculate_net_pay(
            base_pay,
            overtime_pay=to_number(data.get("overtime_pay")),
            bonus=to_number(data.get("bonus")),
            deduction=to_number(data.get("deduction")),
        )
        return jsonify({
            "success": True,
            "data": {
                "base_pay": net.base_pay,
                "overtime_pay": net.overtime_pay,
                "bonus": net.bonus,
                "deduction": net.deduction,
                "net_pay": net.net_pay,
                "calculation_breakdown": net.calculation_breakdown,
                "warning": low_net_pay_warning(net.net_pay, base_pay),
            },
        }), 200

    @app.route("/api/payroll/cycles/finalize", methods=["POST"], endpoint="api_payroll_cycles_finalize")
    def api_payroll_cycles_finalize():
        try:
            data = _json_body()
            cycle = PayrollCycle.from_mapping(data.get("cycle") or {})
            details = [PayrollDetail.from_mapping(d) for d in require_list(data.get("details"), "details")]

            finalization = container.payroll_cycle_service.finalize_cycle(cycle=cycle, details=details)
        except DomainError as e:
            return _error(str(e), 400)

        return jsonify({
            "success": True,
            "message": f'ปิดรอบการจ่ายเงินเดือน "{cycle.name}" เรียบร้อยแล้ว',
            "data": finalization.to_dict(),
        }), 200

    @app.route("/api/payroll/changes-summary", methods=["POST"], endpoint="api_payroll_changes_summary")
    def api_payroll_changes_summary():
        """Describe a bonus/deduction edit for the audit trail."""
        try:
            data = _json_body()
            summary = create_changes_summary(
                data.get("employee_name") or "",
                AdjustmentValues.from_mapping(data.get("old_values") or {}, "old_values"),
                AdjustmentValues.from_mapping(data.get("new_values") or {}, "new_values"),
                bonus_reason=data.get("bonus_reason"),
                deduction_reason=data.get("deduction_reason"),
            )
        except DomainError as e:
            return _error(str(e), 400)

        return jsonify({"success": True, "data": summary.to_dict()}), 200
