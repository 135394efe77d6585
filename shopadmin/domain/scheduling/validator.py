"""Advisory checks over a week schedule. Nothing here mutates or blocks."""

from dataclasses import dataclass
from typing import Optional

from .model import DaySchedule, ScheduleError, WeekSchedule, Weekday, parse_hhmm

NO_HOURS = "No time blocks defined"
INVALID_RANGE = "Block {n} has invalid time range"
SPANS_OVERNIGHT = "Block {n} spans overnight"

# Heuristic kept as the admin editor always had it: start after 22:00 and
# end before 06:00. It can only fire on an inverted block, so it never
# detects a real midnight crossing (those are entered as two day entries).
OVERNIGHT_START_AFTER = parse_hhmm("22:00")
OVERNIGHT_END_BEFORE = parse_hhmm("06:00")


@dataclass(frozen=True)
class ScheduleWarning:
    weekday: Weekday
    message: str
    block_index: Optional[int] = None  # stored position, 0-based

    def __str__(self) -> str:
        return f"{self.weekday.label}: {self.message}"

    def to_dict(self) -> dict:
        return {
            "day": self.weekday.label,
            "blockIndex": self.block_index,
            "message": str(self),
        }


class ScheduleValidationError(ScheduleError):
    """Raised by the blocking save path when a week still has warnings"""

    def __init__(self, warnings: list[ScheduleWarning]):
        self.warnings = warnings
        super().__init__("Schedule validation failed: " + ", ".join(str(w) for w in warnings))


def validate_day(day: DaySchedule) -> list[ScheduleWarning]:
    warnings: list[ScheduleWarning] = []

    if not day.closed and not day.open24h and not day.ranges:
        warnings.append(ScheduleWarning(day.weekday, NO_HOURS))

    for index, block in day.sorted_ranges():
        n = index + 1
        if block.start >= block.end:
            warnings.append(ScheduleWarning(day.weekday, INVALID_RANGE.format(n=n), index))
        if block.start > OVERNIGHT_START_AFTER and block.end < OVERNIGHT_END_BEFORE:
            warnings.append(ScheduleWarning(day.weekday, SPANS_OVERNIGHT.format(n=n), index))

    return warnings


def validate(week: WeekSchedule) -> list[ScheduleWarning]:
    """Warnings for every day, Monday to Sunday, then by block start time"""
    warnings: list[ScheduleWarning] = []
    for day in week.ordered_days():
        warnings.extend(validate_day(day))
    return warnings
