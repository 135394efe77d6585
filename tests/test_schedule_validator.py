from shopadmin.domain.scheduling.model import DaySchedule, TimeRange, WeekSchedule, Weekday
from shopadmin.domain.scheduling.validator import validate, validate_day


def day_with(*ranges, weekday=Weekday.MONDAY):
    day = DaySchedule(weekday)
    for start, end in ranges:
        day.add_range(TimeRange.from_hhmm(start, end))
    return day


def test_single_valid_block_has_no_warnings():
    assert validate_day(day_with(("09:00", "17:00"))) == []


def test_inverted_block_is_reported_once():
    warnings = validate_day(day_with(("10:00", "09:00")))
    assert len(warnings) == 1
    assert warnings[0].message == "Block 1 has invalid time range"
    assert warnings[0].block_index == 0
    assert str(warnings[0]) == "Monday: Block 1 has invalid time range"


def test_empty_open_day_has_no_hours():
    warnings = validate_day(DaySchedule(Weekday.TUESDAY))
    assert [str(w) for w in warnings] == ["Tuesday: No time blocks defined"]


def test_closed_or_24h_day_without_blocks_is_fine():
    closed = DaySchedule(Weekday.MONDAY, closed=True)
    always = DaySchedule(Weekday.MONDAY, open24h=True)
    assert validate_day(closed) == []
    assert validate_day(always) == []


def test_late_inverted_block_is_both_invalid_and_overnight():
    warnings = validate_day(day_with(("23:00", "02:00")))
    assert [w.message for w in warnings] == [
        "Block 1 has invalid time range",
        "Block 1 spans overnight",
    ]


def test_overnight_heuristic_boundaries():
    # 22:00 exactly is not "after 22:00"
    warnings = validate_day(day_with(("22:00", "02:00")))
    assert [w.message for w in warnings] == ["Block 1 has invalid time range"]


def test_warnings_follow_start_order_with_stored_numbers():
    day = day_with(("18:00", "17:00"), ("09:00", "08:00"))
    warnings = validate_day(day)
    assert [w.message for w in warnings] == [
        "Block 2 has invalid time range",
        "Block 1 has invalid time range",
    ]
    assert [w.block_index for w in warnings] == [1, 0]


def test_validate_does_not_mutate():
    day = day_with(("18:00", "17:00"), ("09:00", "12:00"))
    before = [str(r) for r in day.ranges]
    validate_day(day)
    assert [str(r) for r in day.ranges] == before


def test_week_warnings_run_monday_to_sunday():
    week = WeekSchedule.default()
    week[Weekday.SUNDAY].ranges.clear()
    week[Weekday.MONDAY].ranges.clear()
    assert [str(w) for w in validate(week)] == [
        "Monday: No time blocks defined",
        "Sunday: No time blocks defined",
    ]


def test_add_then_remove_reports_no_hours_again():
    day = DaySchedule(Weekday.FRIDAY)
    day.add_range(TimeRange.from_hhmm("09:00", "17:00"))
    assert validate_day(day) == []
    day.remove_range(0)
    assert [w.message for w in validate_day(day)] == ["No time blocks defined"]
