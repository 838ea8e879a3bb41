from payroll_engine.payroll.adjustments import (
    AdjustmentValues,
    PayrollDetail,
    calculate_net_pay,
    calculate_percentage_change,
    create_changes_summary,
    format_currency,
    is_net_pay_negative,
    low_net_pay_warning,
    summarize_payroll_details,
)


def test_net_pay_formula_and_breakdown():
    net = calculate_net_pay(10000, bonus=1000, deduction=500)

    assert net.net_pay == 10500
    assert net.calculation_breakdown == [
        "เงินเดือนพื้นฐาน: ฿10,000.00",
        "โบนัส: ฿1,000.00",
        "หักเงิน: -฿500.00",
        "= เงินเดือนสุทธิ: ฿10,500.00",
    ]


def test_net_pay_breakdown_lists_overtime_and_skips_zero_parts():
    net = calculate_net_pay(1200, overtime_pay=150)

    assert net.net_pay == 1350
    assert net.calculation_breakdown == [
        "เงินเดือนพื้นฐาน: ฿1,200.00",
        "ค่าล่วงเวลา: ฿150.00",
        "= เงินเดือนสุทธิ: ฿1,350.00",
    ]


def test_net_pay_negative():
    assert is_net_pay_negative(1000, deduction=1500) is True
    assert is_net_pay_negative(1000, deduction=1000) is False


def test_format_currency_negative_amount():
    assert format_currency(-50) == "-฿50.00"
    assert format_currency(1234.5) == "฿1,234.50"


def test_summary_of_payroll_details():
    summary = summarize_payroll_details(
        [
            PayrollDetail(base_pay=1000, bonus=100, deduction=0, net_pay=1100),
            PayrollDetail(base_pay=2000.5, bonus=0, deduction=200, net_pay=1800.5),
        ]
    )

    assert summary.total_employees == 2
    assert summary.total_base_pay == 3000.5
    assert summary.total_bonus == 100
    assert summary.total_deduction == 200
    assert summary.total_net_pay == 2900.5
    assert summary.average_net_pay == 1450.25


def test_summary_of_no_details():
    summary = summarize_payroll_details([])

    assert summary.total_employees == 0
    assert summary.average_net_pay == 0


def test_percentage_change():
    assert calculate_percentage_change(0, 0).direction == "no_change"

    from_zero = calculate_percentage_change(0, 500)
    assert (from_zero.percentage, from_zero.direction, from_zero.formatted) == (100, "increase", "∞")

    up = calculate_percentage_change(100, 150)
    assert (up.percentage, up.direction, up.formatted) == (50, "increase", "50.0%")

    down = calculate_percentage_change(200, 150)
    assert (down.percentage, down.direction, down.formatted) == (-25, "decrease", "25.0%")

    assert calculate_percentage_change(-100, -100).direction == "no_change"


def test_low_net_pay_warning_levels():
    assert "เป็น 0 หรือติดลบ" in low_net_pay_warning(0, 1000)
    assert "ต่ำกว่า 50%" in low_net_pay_warning(400, 1000)
    assert low_net_pay_warning(600, 1000).startswith("⚠️ แจ้งเตือน")
    assert low_net_pay_warning(800, 1000) is None
    assert low_net_pay_warning(100, 0) is None


def test_summary_counts_missing_amounts_as_zero_and_totals_overtime():
    summary = summarize_payroll_details(
        [
            PayrollDetail(base_pay=1000, overtime_pay=150.5, net_pay=1150.5),
            PayrollDetail(base_pay=None, net_pay=None),
        ]
    )

    assert summary.total_employees == 2
    assert summary.total_base_pay == 1000
    assert summary.total_overtime_pay == 150.5
    assert summary.total_net_pay == 1150.5


def test_payroll_detail_from_mapping_keeps_missing_pay_unset():
    detail = PayrollDetail.from_mapping({"user_id": "u1", "full_name": "A", "bonus": "50"})

    assert detail.base_pay is None
    assert detail.net_pay is None
    assert detail.bonus == 50
    assert not detail.is_complete


def test_changes_summary_edits_both_adjustments():
    summary = create_changes_summary(
        "สมชาย ใจดี",
        AdjustmentValues(bonus=1000, deduction=500, net_pay=30500),
        AdjustmentValues(bonus=2000, deduction=300, net_pay=31700),
        bonus_reason="ผลงานดีเด่น",
        deduction_reason="มาสายลด",
    )

    assert summary.title == "การเปลี่ยนแปลงเงินเดือนของ สมชาย ใจดี"
    assert summary.changes == [
        "เปลี่ยนโบนัสจาก ฿1,000.00 เป็น ฿2,000.00 (ผลงานดีเด่น)",
        "เปลี่ยนการหักเงินจาก ฿500.00 เป็น ฿300.00 (มาสายลด)",
    ]
    assert summary.net_pay_impact.difference == 1200
    assert summary.net_pay_impact.impact_text == "เงินเดือนสุทธิเพิ่มขึ้น ฿1,200.00"


def test_changes_summary_added_and_removed_adjustments():
    added = create_changes_summary(
        "สมหญิง ขยัน",
        AdjustmentValues(bonus=0, deduction=0, net_pay=30000),
        AdjustmentValues(bonus=5000, deduction=200, net_pay=34800),
        bonus_reason="โบนัสใหม่",
    )
    removed = create_changes_summary(
        "สมศักดิ์ ขยัน",
        AdjustmentValues(bonus=3000, deduction=100, net_pay=32900),
        AdjustmentValues(bonus=0, deduction=0, net_pay=30000),
    )

    assert added.changes == ["เพิ่มโบนัส: ฿5,000.00 (โบนัสใหม่)", "เพิ่มการหักเงิน: ฿200.00 (ไม่มีเหตุผล)"]
    assert removed.changes == ["ลบโบนัส: ฿3,000.00", "ลบการหักเงิน: ฿100.00"]
    assert removed.net_pay_impact.impact_text == "เงินเดือนสุทธิลดลง ฿2,900.00"


def test_changes_summary_without_changes():
    same = AdjustmentValues(bonus=1000, deduction=500, net_pay=30500)

    summary = create_changes_summary("สมปอง เท่าเดิม", same, same)

    assert summary.changes == []
    assert summary.net_pay_impact.difference == 0
    assert summary.net_pay_impact.impact_text == "เงินเดือนสุทธิไม่เปลี่ยนแปลง"
