"""
Weekly availability model.

Times are held as integral minutes since midnight (0-1439) everywhere inside
this package. "HH:MM" strings only appear at the serialization boundary
(see schemas.py).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional

MINUTES_PER_DAY = 24 * 60
LAST_MINUTE = MINUTES_PER_DAY - 1

_HHMM = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")

DEFAULT_CLOSED_MESSAGE = "We're temporarily closed. Please check back later!"


class Weekday(IntEnum):
    """Day identity; value matches schedules.day_of_week and datetime.weekday()"""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_label(cls, value: str) -> "Weekday":
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown day: {value}") from None


class ScheduleError(Exception):
    """Base class for schedule editing errors"""


class TimeRangeIndexError(ScheduleError, IndexError):
    """A block index does not exist in the day's list of ranges"""

    def __init__(self, weekday: Weekday, index: int, size: int):
        self.weekday = weekday
        self.index = index
        self.size = size
        super().__init__(f"{weekday.label} has no time block at index {index} ({size} defined)")


def parse_hhmm(value: str) -> int:
    """'09:30' -> 570. Only zero-padded 24-hour strings are accepted."""
    match = _HHMM.match(value or "")
    if not match:
        raise ValueError(f"Invalid time '{value}', expected HH:MM")
    return int(match.group(1)) * 60 + int(match.group(2))


def format_hhmm(minute: int) -> str:
    """570 -> '09:30'"""
    _check_minute(minute)
    return f"{minute // 60:02d}:{minute % 60:02d}"


def format_12h(minute: int) -> str:
    """570 -> '9:30 AM', 0 -> '12:00 AM'"""
    _check_minute(minute)
    hour, mins = divmod(minute, 60)
    suffix = "PM" if hour >= 12 else "AM"
    hour12 = 12 if hour % 12 == 0 else hour % 12
    return f"{hour12}:{mins:02d} {suffix}"


def _check_minute(minute: int) -> None:
    if isinstance(minute, bool) or not isinstance(minute, int):
        raise ValueError(f"Minute-of-day must be an integer, got {minute!r}")
    if not 0 <= minute <= LAST_MINUTE:
        raise ValueError(f"Minute-of-day must be between 0 and {LAST_MINUTE}, got {minute}")


@dataclass
class TimeRange:
    """One contiguous opening interval within a single day.

    ``start < end`` is expected but not enforced: inverted ranges are kept
    and reported by the validator instead of being rejected here.
    """

    start: int
    end: int
    id: Optional[str] = None

    def __post_init__(self):
        _check_minute(self.start)
        _check_minute(self.end)

    @classmethod
    def from_hhmm(cls, start: str, end: str, id: Optional[str] = None) -> "TimeRange":
        return cls(start=parse_hhmm(start), end=parse_hhmm(end), id=id)

    @property
    def is_valid(self) -> bool:
        return self.start < self.end

    def contains(self, minute: int) -> bool:
        return self.start <= minute < self.end

    def __str__(self) -> str:
        return f"{format_hhmm(self.start)}-{format_hhmm(self.end)}"


@dataclass
class DaySchedule:
    weekday: Weekday
    closed: bool = False
    open24h: bool = False
    ranges: list[TimeRange] = field(default_factory=list)

    def set_closed(self, value: bool) -> None:
        self.closed = value
        if value:
            self.open24h = False

    def set_open24h(self, value: bool) -> None:
        self.open24h = value
        if value:
            self.closed = False

    def add_range(self, time_range: TimeRange) -> TimeRange:
        if time_range.id is None:
            time_range.id = self._next_block_id()
        self.ranges.append(time_range)
        return time_range

    def remove_range(self, index: int) -> TimeRange:
        self._check_index(index)
        return self.ranges.pop(index)

    def update_range(self, index: int, start: Optional[int] = None, end: Optional[int] = None) -> TimeRange:
        self._check_index(index)
        current = self.ranges[index]
        updated = TimeRange(
            start=current.start if start is None else start,
            end=current.end if end is None else end,
            id=current.id,
        )
        self.ranges[index] = updated
        return updated

    def sorted_ranges(self) -> list[tuple[int, TimeRange]]:
        """(stored index, range) pairs ordered by start; sorted() is stable so ties keep stored order"""
        return sorted(enumerate(self.ranges), key=lambda pair: pair[1].start)

    def is_open_at(self, minute: int) -> bool:
        if self.closed:
            return False
        if self.open24h:
            return True
        return any(r.contains(minute) for r in self.ranges if r.is_valid)

    def _check_index(self, index: int) -> None:
        # Negative indices are rejected too: blocks are addressed by position from the editor
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self.ranges):
            raise TimeRangeIndexError(self.weekday, index, len(self.ranges))

    def _next_block_id(self) -> str:
        taken = {r.id for r in self.ranges}
        n = len(self.ranges) + 1
        while f"{self.weekday.label}-{n}" in taken:
            n += 1
        return f"{self.weekday.label}-{n}"

    @classmethod
    def default(cls, weekday: Weekday) -> "DaySchedule":
        return cls(
            weekday=weekday,
            ranges=[TimeRange(start=9 * 60, end=21 * 60, id=f"{weekday.label}-1")],
        )

    @classmethod
    def closed_day(cls, weekday: Weekday) -> "DaySchedule":
        return cls(weekday=weekday, closed=True)


@dataclass
class GlobalOverride:
    """Admin kill switch. forced_open=False closes the shop whatever the days say."""

    forced_open: bool = True
    closed_message: str = DEFAULT_CLOSED_MESSAGE


@dataclass
class WeekSchedule:
    days: dict[Weekday, DaySchedule]
    global_override: GlobalOverride = field(default_factory=GlobalOverride)

    def __post_init__(self):
        missing = [d.label for d in Weekday if d not in self.days]
        if missing:
            raise ValueError(f"Week schedule is missing days: {', '.join(missing)}")
        for weekday, day in self.days.items():
            if day.weekday != weekday:
                raise ValueError(f"{weekday.label} is keyed to a {day.weekday.label} schedule")

    @classmethod
    def default(cls) -> "WeekSchedule":
        return cls(days={d: DaySchedule.default(d) for d in Weekday})

    def __getitem__(self, weekday: Weekday) -> DaySchedule:
        return self.days[Weekday(weekday)]

    def ordered_days(self) -> list[DaySchedule]:
        return [self.days[d] for d in Weekday]

    def effective_day(self, weekday: Weekday) -> DaySchedule:
        """The day as customers see it: the global switch wins over per-day hours"""
        if not self.global_override.forced_open:
            return DaySchedule.closed_day(Weekday(weekday))
        return self.days[Weekday(weekday)]

    def is_open_at(self, weekday: Weekday, minute: int) -> bool:
        _check_minute(minute)
        return self.effective_day(weekday).is_open_at(minute)
