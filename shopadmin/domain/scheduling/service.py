"""Schedule service - editing, validation and availability for the weekly schedule"""

import logging
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session

from ...config import SHOP_TIMEZONE
from .model import DaySchedule, GlobalOverride, TimeRange, WeekSchedule, Weekday, parse_hhmm
from .overview import day_overview, describe_day, summarize_week
from .repository import ScheduleRepository
from .schemas import GlobalShopStatus, week_to_wire
from .validator import ScheduleValidationError, ScheduleWarning, validate, validate_day

logger = logging.getLogger(__name__)


class ScheduleService:
    """Service layer for the weekly schedule.

    The week is loaded from the store at the start of each call and passed
    around explicitly; there is no module-level schedule state.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = ScheduleRepository()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_week(self) -> WeekSchedule:
        return self.repo.load_week(self.db)

    def get_global_status(self) -> GlobalOverride:
        return self.repo.load_global_override(self.db)

    def get_warnings(self, week: Optional[WeekSchedule] = None) -> list[ScheduleWarning]:
        return validate(week or self.get_week())

    def build_overview(self, week: WeekSchedule) -> dict:
        """Everything the admin schedule page shows, recomputed from the week"""
        return {
            "schedules": week_to_wire(week),
            "globalStatus": GlobalShopStatus.from_override(week.global_override).model_dump(),
            "warnings": [w.to_dict() for w in validate(week)],
            "overview": [day_overview(day) for day in week.ordered_days()],
            "summary": summarize_week(week),
        }

    # ------------------------------------------------------------------
    # Whole-week save (the editor's save button)
    # ------------------------------------------------------------------

    def save_week(self, week: WeekSchedule, force: bool = False) -> WeekSchedule:
        """Persist all seven days plus the global switch.

        Blocks on warnings unless ``force`` is set.
        """
        warnings = validate(week)
        if warnings and not force:
            logger.warning(f"⚠️ Schedule save rejected with {len(warnings)} warning(s)")
            raise ScheduleValidationError(warnings)
        if warnings:
            logger.info(f"📋 Saving schedule with {len(warnings)} warning(s) (forced)")

        self.repo.save_week(self.db, week)
        return week

    def save_global_status(self, override: GlobalOverride) -> GlobalOverride:
        self.repo.save_global_override(self.db, override)
        return override

    # ------------------------------------------------------------------
    # Per-day edits (advisory only - warnings are returned, never raised)
    # ------------------------------------------------------------------

    def _save_day(self, day: DaySchedule) -> dict:
        self.repo.save_days(self.db, [day])
        return {
            "day": day_overview(day),
            "warnings": [w.to_dict() for w in validate_day(day)],
        }

    def update_day_toggles(
        self, weekday: Weekday, is_closed: Optional[bool] = None, is_24h: Optional[bool] = None
    ) -> dict:
        day = self.get_week()[weekday]
        if is_closed is not None:
            day.set_closed(is_closed)
        if is_24h is not None:
            day.set_open24h(is_24h)
        return self._save_day(day)

    def add_block(self, weekday: Weekday, start: str = "09:00", end: str = "17:00") -> dict:
        day = self.get_week()[weekday]
        block = day.add_range(TimeRange(start=parse_hhmm(start), end=parse_hhmm(end)))
        logger.info(f"➕ Added block {block} to {weekday.label}")
        return self._save_day(day)

    def update_block(
        self, weekday: Weekday, index: int, start: Optional[str] = None, end: Optional[str] = None
    ) -> dict:
        day = self.get_week()[weekday]
        day.update_range(
            index,
            start=parse_hhmm(start) if start is not None else None,
            end=parse_hhmm(end) if end is not None else None,
        )
        return self._save_day(day)

    def remove_block(self, weekday: Weekday, index: int) -> dict:
        day = self.get_week()[weekday]
        removed = day.remove_range(index)
        logger.info(f"➖ Removed block {removed} from {weekday.label}")
        return self._save_day(day)

    # ------------------------------------------------------------------
    # Storefront availability
    # ------------------------------------------------------------------

    def current_status(self, now: Optional[datetime] = None) -> dict:
        week = self.get_week()
        local_now = now.astimezone(ZoneInfo(SHOP_TIMEZONE)) if now else datetime.now(ZoneInfo(SHOP_TIMEZONE))
        weekday = Weekday(local_now.weekday())
        minute = local_now.hour * 60 + local_now.minute
        today = week.effective_day(weekday)
        is_open = week.is_open_at(weekday, minute)

        return {
            "isOpen": is_open,
            "acceptingOrders": week.global_override.forced_open,
            "closedMessage": None if week.global_override.forced_open else week.global_override.closed_message,
            "day": weekday.label,
            "today": describe_day(today),
        }

    def public_hours(self) -> list[dict]:
        week = self.get_week()
        return [
            {"day": day.label, "hours": describe_day(week.effective_day(day))}
            for day in Weekday
        ]
