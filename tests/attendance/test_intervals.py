from payroll_engine.attendance.intervals import calculate_hours_worked, group_time_entries_by_date, resolve_interval
from payroll_engine.attendance.model import TimeEntry
from payroll_engine.core.enums import IntervalStatus


def test_hours_worked_full_and_fractional_hours():
    assert calculate_hours_worked("2025-01-15T08:00:00Z", "2025-01-15T16:00:00Z") == 8
    assert calculate_hours_worked("2025-01-15T08:00:00Z", "2025-01-15T16:30:00Z") == 8.5
    assert calculate_hours_worked("2025-01-15T08:00:00Z", "2025-01-15T16:20:00Z") == 8.33


def test_hours_worked_rounds_half_up_to_two_places():
    # 27 seconds = 0.0075 h
    assert calculate_hours_worked("2025-01-15T08:00:00Z", "2025-01-15T08:00:27Z") == 0.01


def test_hours_worked_is_zero_when_checkout_not_after_checkin():
    assert calculate_hours_worked("2025-01-15T16:00:00Z", "2025-01-15T08:00:00Z") == 0
    assert calculate_hours_worked("2025-01-15T08:00:00Z", "2025-01-15T08:00:00Z") == 0


def test_hours_worked_is_zero_for_unparsable_input():
    assert calculate_hours_worked("invalid", "2025-01-15T08:00:00Z") == 0
    assert calculate_hours_worked("2025-01-15T08:00:00Z", None) == 0


def test_hours_worked_cross_midnight_and_offsets():
    assert calculate_hours_worked("2025-01-15T23:00:00Z", "2025-01-16T07:00:00Z") == 8
    assert calculate_hours_worked("2025-01-15T08:00:00+07:00", "2025-01-15T17:00:00+07:00") == 9
    # same instant written in two offsets
    assert calculate_hours_worked("2025-01-15T08:00:00+07:00", "2025-01-15T02:00:00Z") == 1


def test_resolve_interval_variants():
    valid = resolve_interval(TimeEntry("2025-01-15T08:00:00Z", "2025-01-15T12:00:00Z"))
    assert valid.status == IntervalStatus.VALID
    assert valid.hours == 4
    assert valid.date == "2025-01-15"

    open_session = resolve_interval(TimeEntry("2025-01-15T08:00:00Z", None))
    assert open_session.status == IntervalStatus.OPEN
    assert open_session.hours == 0

    assert resolve_interval(TimeEntry("nope", "2025-01-15T12:00:00Z")).status == IntervalStatus.INVALID
    assert resolve_interval(TimeEntry("2025-01-15T08:00:00Z", "nope")).status == IntervalStatus.INVALID


def test_group_by_checkin_date():
    entries = [
        TimeEntry("2025-01-15T08:00:00Z", "2025-01-15T12:00:00Z"),
        TimeEntry("2025-01-16T08:00:00Z", "2025-01-16T17:00:00Z"),
        TimeEntry("2025-01-15T13:00:00Z", "2025-01-15T17:00:00Z"),
    ]

    grouped = group_time_entries_by_date(entries)

    assert set(grouped) == {"2025-01-15", "2025-01-16"}
    assert len(grouped["2025-01-15"]) == 2
    assert len(grouped["2025-01-16"]) == 1


def test_group_uses_checkin_date_for_cross_midnight_sessions():
    entry = TimeEntry("2025-01-15T23:00:00Z", "2025-01-16T07:00:00Z")

    assert group_time_entries_by_date([entry]) == {"2025-01-15": [entry]}


def test_group_skips_invalid_checkin(caplog):
    entries = [
        TimeEntry("invalid-date", "2025-01-15T12:00:00Z"),
        TimeEntry("2025-01-15T08:00:00Z", "2025-01-15T12:00:00Z"),
    ]

    grouped = group_time_entries_by_date(entries)

    assert list(grouped) == ["2025-01-15"]
    assert "unparsable check-in" in caplog.text


def test_group_empty_input():
    assert group_time_entries_by_date([]) == {}


def test_time_entry_from_mapping():
    entry = TimeEntry.from_mapping({"check_in_time": "2025-01-15T08:00:00Z", "check_out_time": None, "user_id": "x"})

    assert entry.check_in_time == "2025-01-15T08:00:00Z"
    assert entry.is_open
