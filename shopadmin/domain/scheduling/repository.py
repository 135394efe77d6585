"""Schedule repository - Database operations for day schedules and the global shop switch"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import Schedule, ShopSetting
from ...shared.errors import PersistenceError
from .model import DaySchedule, GlobalOverride, WeekSchedule, Weekday
from .schemas import DayScheduleSchema, GlobalShopStatus, TimeBlockSchema

logger = logging.getLogger(__name__)

GLOBAL_STATUS_KEY = "global_shop_status"


def _row_to_day(row: Schedule) -> DaySchedule:
    weekday = Weekday(row.day_of_week)
    day = DaySchedule(weekday=weekday, closed=bool(row.is_closed), open24h=bool(row.is_24h))
    for raw in row.time_blocks or []:
        day.add_range(TimeBlockSchema(**raw).to_range())
    return day


class ScheduleRepository:
    """Repository for schedule database operations"""

    @staticmethod
    def get_rows(db: Session) -> dict[int, Schedule]:
        rows = db.query(Schedule).order_by(Schedule.day_of_week.asc()).all()
        return {row.day_of_week: row for row in rows}

    @staticmethod
    def load_week(db: Session) -> WeekSchedule:
        """Stored days, with defaults filled in for any day never saved"""
        try:
            rows = ScheduleRepository.get_rows(db)
            override = ScheduleRepository.load_global_override(db)
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to load schedules: {e}")
            raise PersistenceError("load schedules", str(e)) from e

        days = {}
        for weekday in Weekday:
            row = rows.get(int(weekday))
            days[weekday] = _row_to_day(row) if row else DaySchedule.default(weekday)
        return WeekSchedule(days=days, global_override=override)

    @staticmethod
    def _stage_days(db: Session, days: list[DaySchedule]) -> None:
        rows = ScheduleRepository.get_rows(db)
        for day in days:
            wire = DayScheduleSchema.from_day(day)
            row = rows.get(int(day.weekday))
            if row is None:
                row = Schedule(day_of_week=int(day.weekday))
                db.add(row)
            row.is_closed = wire.isClosed
            row.is_24h = wire.is24h
            row.time_blocks = [b.model_dump() for b in wire.timeBlocks]

    @staticmethod
    def _stage_global_override(db: Session, override: GlobalOverride) -> None:
        value = GlobalShopStatus.from_override(override).model_dump()
        setting = ScheduleRepository._get_setting(db, GLOBAL_STATUS_KEY)
        if setting is None:
            db.add(ShopSetting(setting_key=GLOBAL_STATUS_KEY, setting_value=value))
        else:
            setting.setting_value = value

    @staticmethod
    def save_days(db: Session, days: list[DaySchedule]) -> None:
        """Upsert the given days in one transaction"""
        try:
            ScheduleRepository._stage_days(db, days)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"❌ Failed to save schedules: {e}")
            raise PersistenceError("save schedules", str(e)) from e
        logger.info(f"✅ Saved schedule for {', '.join(d.weekday.label for d in days)}")

    @staticmethod
    def save_week(db: Session, week: WeekSchedule) -> None:
        """All seven days and the global switch, committed together"""
        try:
            ScheduleRepository._stage_days(db, week.ordered_days())
            ScheduleRepository._stage_global_override(db, week.global_override)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"❌ Failed to save weekly schedule: {e}")
            raise PersistenceError("save schedules", str(e)) from e
        logger.info("✅ Weekly schedule saved")

    @staticmethod
    def _get_setting(db: Session, key: str) -> Optional[ShopSetting]:
        return db.query(ShopSetting).filter(ShopSetting.setting_key == key).first()

    @staticmethod
    def load_global_override(db: Session) -> GlobalOverride:
        try:
            setting = ScheduleRepository._get_setting(db, GLOBAL_STATUS_KEY)
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to load global shop status: {e}")
            raise PersistenceError("load global shop status", str(e)) from e
        if not setting or not setting.setting_value:
            return GlobalOverride()
        value = setting.setting_value
        return GlobalOverride(
            forced_open=bool(value.get("isOpen", True)),
            closed_message=value.get("closedMessage") or GlobalOverride().closed_message,
        )

    @staticmethod
    def save_global_override(db: Session, override: GlobalOverride) -> None:
        try:
            ScheduleRepository._stage_global_override(db, override)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"❌ Failed to save global shop status: {e}")
            raise PersistenceError("save global shop status", str(e)) from e
        logger.info(f"✅ Global shop status saved (open={override.forced_open})")
