"""
Timeline view-model for the schedule overview.

Everything here is derived from a DaySchedule/WeekSchedule on each call;
nothing is cached or stored.
"""

from dataclasses import dataclass

from .model import MINUTES_PER_DAY, DaySchedule, WeekSchedule, format_12h

# Segment kinds
CLOSED = "closed"
OPEN_24H = "open_24h"
NO_HOURS = "no_hours"
OCCUPIED = "occupied"
GAP = "gap"

# Day status labels
STATUS_LABELS = {
    "closed": "Closed",
    "open_24h": "24/7",
    "split": "Split Shift",
    "open": "Open",
    "no_hours": "No Hours",
}


@dataclass(frozen=True)
class TimelineSegment:
    left_percent: float
    width_percent: float
    kind: str
    start: int = 0
    end: int = MINUTES_PER_DAY

    def to_dict(self) -> dict:
        return {
            "leftPercent": round(self.left_percent, 4),
            "widthPercent": round(self.width_percent, 4),
            "kind": self.kind,
            "start": self.start,
            "end": self.end,
        }


def _percent(minutes: int) -> float:
    return minutes / MINUTES_PER_DAY * 100


def _segment(start: int, end: int, kind: str) -> TimelineSegment:
    return TimelineSegment(_percent(start), _percent(end - start), kind, start, end)


def render(day: DaySchedule) -> list[TimelineSegment]:
    if day.closed:
        return [_segment(0, MINUTES_PER_DAY, CLOSED)]
    if day.open24h:
        return [_segment(0, MINUTES_PER_DAY, OPEN_24H)]
    if not day.ranges:
        return [_segment(0, MINUTES_PER_DAY, NO_HOURS)]

    # Inverted blocks are left to the validator and drawn as nothing.
    # Overlapping blocks are clipped against what is already drawn so bars never stack.
    segments: list[TimelineSegment] = []
    cursor = None
    for _, block in day.sorted_ranges():
        if not block.is_valid:
            continue
        start = block.start if cursor is None else max(block.start, cursor)
        if cursor is not None and block.start > cursor:
            segments.append(_segment(cursor, block.start, GAP))
        if block.end > start:
            segments.append(_segment(start, block.end, OCCUPIED))
        cursor = block.end if cursor is None else max(cursor, block.end)
    return segments


def day_status(day: DaySchedule) -> str:
    if day.closed:
        return "closed"
    if day.open24h:
        return "open_24h"
    if not day.ranges:
        return "no_hours"
    return "split" if len(day.ranges) > 1 else "open"


def describe_day(day: DaySchedule) -> str:
    if day.closed:
        return "Closed all day"
    if day.open24h:
        return "Open 24 hours"
    if not day.ranges:
        return "Hours not set"
    return ", ".join(f"{format_12h(r.start)} - {format_12h(r.end)}" for r in day.ranges)


def summarize_week(week: WeekSchedule) -> dict:
    days = week.ordered_days()
    return {
        "regularDays": sum(1 for d in days if not d.closed and not d.open24h),
        "openAllDayDays": sum(1 for d in days if d.open24h),
        "closedDays": sum(1 for d in days if d.closed),
        "splitShiftDays": sum(1 for d in days if len(d.ranges) > 1),
    }


def day_overview(day: DaySchedule) -> dict:
    status = day_status(day)
    return {
        "day": day.weekday.label,
        "status": status,
        "label": STATUS_LABELS[status],
        "description": describe_day(day),
        "segments": [s.to_dict() for s in render(day)],
    }
