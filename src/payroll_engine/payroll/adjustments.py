"""Net pay on top of the calculated base pay (bonus, deduction, overtime)."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

from ..common.numbers import round_half_up, to_number
from ..common.validators import require_mapping
from ..core.constants import (
    CURRENCY_SYMBOL,
    LOW_NET_PAY_NOTICE_PERCENT,
    LOW_NET_PAY_WARNING_PERCENT,
    MONEY_DECIMAL_PLACES,
)

_NO_REASON = "ไม่มีเหตุผล"


@dataclass(frozen=True)
class NetPayCalculation:
    base_pay: float
    overtime_pay: float
    bonus: float
    deduction: float
    net_pay: float
    calculation_breakdown: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class PayrollDetail:
    """Persisted per-employee payroll line.

    ``base_pay`` and ``net_pay`` stay ``None`` when the stored row lacks them;
    a cycle holding such a line cannot be finalized.
    """

    base_pay: Optional[float]
    bonus: float = 0.0
    deduction: float = 0.0
    net_pay: Optional[float] = 0.0
    overtime_pay: float = 0.0
    user_id: Optional[str] = None
    full_name: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PayrollDetail":
        data = require_mapping(data, "details[]")
        base_pay = data.get("base_pay")
        net_pay = data.get("net_pay")
        return cls(
            base_pay=None if base_pay is None else to_number(base_pay),
            bonus=to_number(data.get("bonus")),
            deduction=to_number(data.get("deduction")),
            net_pay=None if net_pay is None else to_number(net_pay),
            overtime_pay=to_number(data.get("overtime_pay")),
            user_id=data.get("user_id"),
            full_name=data.get("full_name"),
        )

    @property
    def is_complete(self) -> bool:
        return bool(self.full_name) and self.base_pay is not None and self.net_pay is not None


@dataclass(frozen=True)
class PayrollDetailSummary:
    total_employees: int
    total_base_pay: float
    total_bonus: float
    total_deduction: float
    total_net_pay: float
    average_net_pay: float
    total_overtime_pay: float = 0.0

    def to_dict(self) -> dict:
        return {
            "total_employees": self.total_employees,
            "total_base_pay": self.total_base_pay,
            "total_overtime_pay": self.total_overtime_pay,
            "total_bonus": self.total_bonus,
            "total_deduction": self.total_deduction,
            "total_net_pay": self.total_net_pay,
            "average_net_pay": self.average_net_pay,
        }


@dataclass(frozen=True)
class PercentageChange:
    percentage: float
    direction: str
    formatted: str


@dataclass(frozen=True)
class AdjustmentValues:
    bonus: float
    deduction: float
    net_pay: float

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], field_name: str) -> "AdjustmentValues":
        data = require_mapping(data, field_name)
        return cls(
            bonus=to_number(data.get("bonus")),
            deduction=to_number(data.get("deduction")),
            net_pay=to_number(data.get("net_pay")),
        )


@dataclass(frozen=True)
class NetPayImpact:
    old_net_pay: float
    new_net_pay: float
    difference: float
    impact_text: str


@dataclass(frozen=True)
class ChangesSummary:
    title: str
    changes: list[str]
    net_pay_impact: NetPayImpact

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "changes": list(self.changes),
            "net_pay_impact": {
                "old_net_pay": self.net_pay_impact.old_net_pay,
                "new_net_pay": self.net_pay_impact.new_net_pay,
                "difference": self.net_pay_impact.difference,
                "impact_text": self.net_pay_impact.impact_text,
            },
        }


def format_currency(amount: float) -> str:
    sign = "-" if amount < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(amount):,.2f}"


def calculate_net_pay(
    base_pay: float,
    overtime_pay: float = 0,
    bonus: float = 0,
    deduction: float = 0,
) -> NetPayCalculation:
    """net = base + overtime + bonus - deduction, with a Thai breakdown for the admin UI."""
    net_pay = base_pay + overtime_pay + bonus - deduction

    breakdown = [f"เงินเดือนพื้นฐาน: {format_currency(base_pay)}"]
    if overtime_pay > 0:
        breakdown.append(f"ค่าล่วงเวลา: {format_currency(overtime_pay)}")
    if bonus > 0:
        breakdown.append(f"โบนัส: {format_currency(bonus)}")
    if deduction > 0:
        breakdown.append(f"หักเงิน: -{format_currency(deduction)}")
    breakdown.append(f"= เงินเดือนสุทธิ: {format_currency(net_pay)}")

    return NetPayCalculation(
        base_pay=base_pay,
        overtime_pay=overtime_pay,
        bonus=bonus,
        deduction=deduction,
        net_pay=net_pay,
        calculation_breakdown=breakdown,
    )


def is_net_pay_negative(base_pay: float, overtime_pay: float = 0, bonus: float = 0, deduction: float = 0) -> bool:
    return (base_pay + overtime_pay + bonus - deduction) < 0


def summarize_payroll_details(details: Iterable[PayrollDetail]) -> PayrollDetailSummary:
    """Cycle totals; a missing base or net pay counts as 0."""
    details = list(details)
    count = len(details)
    total_base = sum(d.base_pay or 0 for d in details)
    total_overtime = sum(d.overtime_pay for d in details)
    total_bonus = sum(d.bonus for d in details)
    total_deduction = sum(d.deduction for d in details)
    total_net = sum(d.net_pay or 0 for d in details)
    average = total_net / count if count else 0

    def money(value: float) -> float:
        return round_half_up(value, MONEY_DECIMAL_PLACES)

    return PayrollDetailSummary(
        total_employees=count,
        total_base_pay=money(total_base),
        total_bonus=money(total_bonus),
        total_deduction=money(total_deduction),
        total_net_pay=money(total_net),
        average_net_pay=money(average),
        total_overtime_pay=money(total_overtime),
    )


def calculate_percentage_change(old_value: float, new_value: float) -> PercentageChange:
    if old_value == 0 and new_value == 0:
        return PercentageChange(percentage=0, direction="no_change", formatted="0%")
    if old_value == 0:
        return PercentageChange(percentage=100, direction="increase", formatted="∞")

    percentage = (new_value - old_value) / abs(old_value) * 100
    if percentage > 0:
        direction = "increase"
    elif percentage < 0:
        direction = "decrease"
    else:
        direction = "no_change"
    return PercentageChange(percentage=percentage, direction=direction, formatted=f"{abs(percentage):.1f}%")


def _describe_change(label: str, old: float, new: float, reason: Optional[str]) -> Optional[str]:
    if old == new:
        return None
    if old == 0 and new > 0:
        return f"เพิ่ม{label}: {format_currency(new)} ({reason or _NO_REASON})"
    if old > 0 and new == 0:
        return f"ลบ{label}: {format_currency(old)}"
    return f"เปลี่ยน{label}จาก {format_currency(old)} เป็น {format_currency(new)} ({reason or _NO_REASON})"


def create_changes_summary(
    employee_name: str,
    old_values: AdjustmentValues,
    new_values: AdjustmentValues,
    *,
    bonus_reason: Optional[str] = None,
    deduction_reason: Optional[str] = None,
) -> ChangesSummary:
    """Thai description of a bonus/deduction edit and what it does to net pay."""
    changes = [
        text
        for text in (
            _describe_change("โบนัส", old_values.bonus, new_values.bonus, bonus_reason),
            _describe_change("การหักเงิน", old_values.deduction, new_values.deduction, deduction_reason),
        )
        if text is not None
    ]

    difference = round_half_up(new_values.net_pay - old_values.net_pay, MONEY_DECIMAL_PLACES)
    if difference > 0:
        impact_text = f"เงินเดือนสุทธิเพิ่มขึ้น {format_currency(difference)}"
    elif difference < 0:
        impact_text = f"เงินเดือนสุทธิลดลง {format_currency(abs(difference))}"
    else:
        impact_text = "เงินเดือนสุทธิไม่เปลี่ยนแปลง"

    return ChangesSummary(
        title=f"การเปลี่ยนแปลงเงินเดือนของ {employee_name}",
        changes=changes,
        net_pay_impact=NetPayImpact(
            old_net_pay=old_values.net_pay,
            new_net_pay=new_values.net_pay,
            difference=difference,
            impact_text=impact_text,
        ),
    )


def low_net_pay_warning(net_pay: float, base_pay: float) -> Optional[str]:
    if net_pay <= 0:
        return "⚠️ เตือน: เงินเดือนสุทธิเป็น 0 หรือติดลบ กรุณาตรวจสอบการหักเงิน"
    if base_pay <= 0:
        return None

    percentage = net_pay / base_pay * 100
    if percentage < LOW_NET_PAY_WARNING_PERCENT:
        return f"⚠️ เตือน: เงินเดือนสุทธิต่ำกว่า {LOW_NET_PAY_WARNING_PERCENT}% ของเงินเดือนพื้นฐาน"
    if percentage < LOW_NET_PAY_NOTICE_PERCENT:
        return f"⚠️ แจ้งเตือน: เงินเดือนสุทธิต่ำกว่า {LOW_NET_PAY_NOTICE_PERCENT}% ของเงินเดือนพื้นฐาน"
    return None
