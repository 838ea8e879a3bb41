from __future__ import annotations

from enum import Enum


class CalculationMethod(str, Enum):
    """How a day (or a whole period) was paid."""

    HOURLY = "hourly"
    DAILY = "daily"
    MIXED = "mixed"


class IntervalStatus(str, Enum):
    """Outcome of resolving one check-in/check-out pair."""

    VALID = "VALID"
    OPEN = "OPEN"
    INVALID = "INVALID"


class PayrollCycleStatus(str, Enum):
    """Only ACTIVE cycles may be calculated."""

    ACTIVE = "active"
    COMPLETED = "completed"


class DateRangeError(str, Enum):
    """Reasons a payroll cycle date range is rejected, in check order."""

    REQUIRED = "start/end required"
    INVALID_FORMAT = "invalid format"
    START_NOT_BEFORE_END = "start must precede end"
    SPAN_TOO_LONG = "range exceeds 1 year"
    TOO_FAR_IN_FUTURE = "too far in future"

    @property
    def message(self) -> str:
        return _DATE_RANGE_MESSAGES[self]


_DATE_RANGE_MESSAGES = {
    DateRangeError.REQUIRED: "กรุณาระบุวันที่เริ่มต้นและสิ้นสุด",
    DateRangeError.INVALID_FORMAT: "รูปแบบวันที่ไม่ถูกต้อง",
    DateRangeError.START_NOT_BEFORE_END: "วันที่เริ่มต้นต้องน้อยกว่าวันที่สิ้นสุด",
    DateRangeError.SPAN_TOO_LONG: "ช่วงรอบการจ่ายเงินเดือนไม่ควรเกิน 1 ปี",
    DateRangeError.TOO_FAR_IN_FUTURE: "วันที่สิ้นสุดไม่ควรเกิน 1 ปีจากปัจจุบัน",
}
