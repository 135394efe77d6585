"""Scheduling domain schemas - wire format for day schedules and the global switch"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...shared.validators import validate_hhmm
from ...utils.sanitization import validate_and_sanitize_input
from .model import (
    DEFAULT_CLOSED_MESSAGE,
    DaySchedule,
    GlobalOverride,
    TimeRange,
    WeekSchedule,
    Weekday,
    format_hhmm,
)


class TimeBlockSchema(BaseModel):
    """One time block as stored and sent over the wire"""

    id: Optional[str] = None
    startTime: str
    endTime: str

    @field_validator("startTime", "endTime")
    @classmethod
    def validate_time(cls, v):
        return validate_hhmm(v)

    def to_range(self) -> TimeRange:
        return TimeRange.from_hhmm(self.startTime, self.endTime, id=self.id)

    @classmethod
    def from_range(cls, time_range: TimeRange) -> "TimeBlockSchema":
        return cls(
            id=time_range.id,
            startTime=format_hhmm(time_range.start),
            endTime=format_hhmm(time_range.end),
        )


class DayScheduleSchema(BaseModel):
    """{day, isClosed, is24h, timeBlocks}"""

    day: str
    isClosed: bool = False
    is24h: bool = False
    timeBlocks: list[TimeBlockSchema] = Field(default_factory=list)

    @field_validator("day")
    @classmethod
    def validate_day(cls, v):
        return Weekday.from_label(v).label

    @model_validator(mode="after")
    def check_toggles(self):
        if self.isClosed and self.is24h:
            raise ValueError("A day cannot be both closed and open 24 hours")
        return self

    def to_day(self) -> DaySchedule:
        day = DaySchedule(weekday=Weekday.from_label(self.day), closed=self.isClosed, open24h=self.is24h)
        for block in self.timeBlocks:
            day.add_range(block.to_range())
        return day

    @classmethod
    def from_day(cls, day: DaySchedule) -> "DayScheduleSchema":
        return cls(
            day=day.weekday.label,
            isClosed=day.closed,
            is24h=day.open24h,
            timeBlocks=[TimeBlockSchema.from_range(r) for r in day.ranges],
        )


class GlobalShopStatus(BaseModel):
    """Stored under shop_settings.global_shop_status"""

    isOpen: bool = True
    closedMessage: str = DEFAULT_CLOSED_MESSAGE

    @field_validator("closedMessage")
    @classmethod
    def validate_message(cls, v):
        return validate_and_sanitize_input(v, max_length=500)

    def to_override(self) -> GlobalOverride:
        return GlobalOverride(forced_open=self.isOpen, closed_message=self.closedMessage)

    @classmethod
    def from_override(cls, override: GlobalOverride) -> "GlobalShopStatus":
        return cls.model_construct(isOpen=override.forced_open, closedMessage=override.closed_message)


class WeekScheduleSchema(BaseModel):
    """Full week replace payload; days may come in any order but all seven are required"""

    schedules: list[DayScheduleSchema]
    globalStatus: Optional[GlobalShopStatus] = None

    @field_validator("schedules")
    @classmethod
    def validate_all_days(cls, v):
        days = [s.day for s in v]
        if len(days) != len(set(days)):
            raise ValueError("Each day may only appear once")
        missing = [d.label for d in Weekday if d.label not in days]
        if missing:
            raise ValueError(f"Missing days: {', '.join(missing)}")
        return v

    def to_week(self, current_override: GlobalOverride) -> WeekSchedule:
        override = self.globalStatus.to_override() if self.globalStatus else current_override
        days = {}
        for item in self.schedules:
            day = item.to_day()
            days[day.weekday] = day
        return WeekSchedule(days=days, global_override=override)


class DayToggleUpdate(BaseModel):
    isClosed: Optional[bool] = None
    is24h: Optional[bool] = None


class TimeBlockCreate(BaseModel):
    startTime: str = "09:00"
    endTime: str = "17:00"

    @field_validator("startTime", "endTime")
    @classmethod
    def validate_time(cls, v):
        return validate_hhmm(v)


class TimeBlockUpdate(BaseModel):
    startTime: Optional[str] = None
    endTime: Optional[str] = None

    @field_validator("startTime", "endTime")
    @classmethod
    def validate_time(cls, v):
        return validate_hhmm(v)


def week_to_wire(week: WeekSchedule) -> list[dict]:
    return [DayScheduleSchema.from_day(day).model_dump() for day in week.ordered_days()]
