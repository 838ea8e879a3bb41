"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Above this many hours in one day the flat daily rate replaces hourly pay.
DAILY_RATE_THRESHOLD_HOURS = 12
HOURS_DECIMAL_PLACES = 2
MONEY_DECIMAL_PLACES = 2

MAX_CYCLE_SPAN_DAYS = 365
MAX_FUTURE_YEARS = 1

DATE_KEY_FORMAT = "%Y-%m-%d"

BUDDHIST_ERA_OFFSET = 543
PAYROLL_CYCLE_PREFIX = "เงินเดือน"
THAI_MONTH_ABBREVIATIONS = (
    "ม.ค.",
    "ก.พ.",
    "มี.ค.",
    "เม.ย.",
    "พ.ค.",
    "มิ.ย.",
    "ก.ค.",
    "ส.ค.",
    "ก.ย.",
    "ต.ค.",
    "พ.ย.",
    "ธ.ค.",
)

CURRENCY_SYMBOL = "฿"
LOW_NET_PAY_WARNING_PERCENT = 50
LOW_NET_PAY_NOTICE_PERCENT = 70
