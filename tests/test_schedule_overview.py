import pytest

from shopadmin.domain.scheduling.model import DaySchedule, TimeRange, WeekSchedule, Weekday
from shopadmin.domain.scheduling.overview import (
    CLOSED,
    GAP,
    NO_HOURS,
    OCCUPIED,
    OPEN_24H,
    day_overview,
    day_status,
    describe_day,
    render,
    summarize_week,
)


def day_with(*ranges):
    day = DaySchedule(Weekday.MONDAY)
    for start, end in ranges:
        day.add_range(TimeRange.from_hhmm(start, end))
    return day


def test_single_block():
    segments = render(day_with(("09:00", "17:00")))
    assert len(segments) == 1
    assert segments[0].kind == OCCUPIED
    assert segments[0].left_percent == pytest.approx(37.5)
    assert segments[0].width_percent == pytest.approx(33.333, abs=0.01)


def test_two_blocks_with_gap():
    segments = render(day_with(("09:00", "12:00"), ("14:00", "18:00")))
    assert [s.kind for s in segments] == [OCCUPIED, GAP, OCCUPIED]
    gap = segments[1]
    assert gap.left_percent == pytest.approx(50.0)
    assert gap.width_percent == pytest.approx(8.333, abs=0.01)


def test_blocks_drawn_in_start_order():
    segments = render(day_with(("14:00", "18:00"), ("09:00", "12:00")))
    assert [(s.start, s.end) for s in segments] == [(540, 720), (720, 840), (840, 1080)]


def test_no_head_or_tail_segments():
    segments = render(day_with(("09:00", "17:00")))
    assert segments[0].start == 540
    assert segments[-1].end == 1020


def test_adjacent_blocks_have_no_gap():
    segments = render(day_with(("09:00", "12:00"), ("12:00", "15:00")))
    assert [s.kind for s in segments] == [OCCUPIED, OCCUPIED]


def test_overlapping_blocks_do_not_stack():
    segments = render(day_with(("09:00", "13:00"), ("12:00", "15:00")))
    assert [(s.start, s.end) for s in segments] == [(540, 780), (780, 900)]


def test_inverted_block_is_not_drawn():
    segments = render(day_with(("10:00", "09:00"), ("12:00", "13:00")))
    assert [(s.kind, s.start, s.end) for s in segments] == [(OCCUPIED, 720, 780)]


@pytest.mark.parametrize(
    "day,kind",
    [
        (DaySchedule(Weekday.MONDAY, closed=True), CLOSED),
        (DaySchedule(Weekday.MONDAY, open24h=True), OPEN_24H),
        (DaySchedule(Weekday.MONDAY), NO_HOURS),
    ],
)
def test_full_width_segments(day, kind):
    segments = render(day)
    assert len(segments) == 1
    assert segments[0].kind == kind
    assert segments[0].left_percent == 0
    assert segments[0].width_percent == pytest.approx(100)


def test_descriptions():
    assert describe_day(DaySchedule(Weekday.MONDAY, closed=True)) == "Closed all day"
    assert describe_day(DaySchedule(Weekday.MONDAY, open24h=True)) == "Open 24 hours"
    assert describe_day(DaySchedule(Weekday.MONDAY)) == "Hours not set"
    assert (
        describe_day(day_with(("09:00", "12:00"), ("14:00", "18:00")))
        == "9:00 AM - 12:00 PM, 2:00 PM - 6:00 PM"
    )


def test_status_and_overview():
    split = day_with(("09:00", "12:00"), ("14:00", "18:00"))
    assert day_status(split) == "split"
    overview = day_overview(split)
    assert overview["day"] == "Monday"
    assert overview["label"] == "Split Shift"
    assert [s["kind"] for s in overview["segments"]] == ["occupied", "gap", "occupied"]


def test_summarize_week():
    week = WeekSchedule.default()
    week[Weekday.SUNDAY].set_closed(True)
    week[Weekday.SATURDAY].set_open24h(True)
    week[Weekday.FRIDAY].add_range(TimeRange.from_hhmm("22:00", "23:00"))
    assert summarize_week(week) == {
        "regularDays": 5,
        "openAllDayDays": 1,
        "closedDays": 1,
        "splitShiftDays": 1,
    }
