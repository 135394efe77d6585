"""Schedule router - admin endpoints for the weekly opening hours"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ...auth import get_current_admin
from ...database import get_db
from .model import TimeRangeIndexError, Weekday
from .schemas import (
    DayToggleUpdate,
    GlobalShopStatus,
    TimeBlockCreate,
    TimeBlockUpdate,
    WeekScheduleSchema,
)
from .service import ScheduleService
from .validator import ScheduleValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/schedules", tags=["Schedules"], dependencies=[Depends(get_current_admin)])


def get_schedule_service(db: Session = Depends(get_db)) -> ScheduleService:
    """Dependency injection for ScheduleService"""
    return ScheduleService(db)


def _weekday(day: str) -> Weekday:
    try:
        return Weekday.from_label(day)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


# ============================================================================
# WEEK
# ============================================================================


@router.get("")
async def get_schedules(service: ScheduleService = Depends(get_schedule_service)):
    """All seven days with warnings, timeline segments and the weekly summary"""
    return service.build_overview(service.get_week())


@router.put("")
async def replace_schedules(
    data: WeekScheduleSchema,
    force: bool = Query(False, description="Save even when the week has warnings"),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Replace the whole week. Rejected with 422 while warnings remain unless force=true."""
    week = data.to_week(service.get_global_status())
    try:
        service.save_week(week, force=force)
    except ScheduleValidationError as e:
        raise HTTPException(
            status_code=422,
            detail={
                "message": "Schedule has warnings. Fix them or save with force=true.",
                "warnings": [w.to_dict() for w in e.warnings],
            },
        ) from e
    return service.build_overview(week)


@router.get("/warnings")
async def get_schedule_warnings(service: ScheduleService = Depends(get_schedule_service)):
    return [w.to_dict() for w in service.get_warnings()]


# ============================================================================
# GLOBAL SHOP STATUS
# ============================================================================


@router.get("/global-status", response_model=GlobalShopStatus)
async def get_global_status(service: ScheduleService = Depends(get_schedule_service)):
    return GlobalShopStatus.from_override(service.get_global_status())


@router.put("/global-status", response_model=GlobalShopStatus)
async def update_global_status(
    data: GlobalShopStatus,
    service: ScheduleService = Depends(get_schedule_service),
):
    """Open or close the whole shop regardless of the weekly hours"""
    override = service.save_global_status(data.to_override())
    logger.info(f"🏪 Shop switched {'open' if override.forced_open else 'closed'}")
    return GlobalShopStatus.from_override(override)


# ============================================================================
# SINGLE DAY EDITS (advisory - warnings come back with the response)
# ============================================================================


@router.patch("/{day}")
async def update_day(
    day: str,
    data: DayToggleUpdate,
    service: ScheduleService = Depends(get_schedule_service),
):
    return service.update_day_toggles(_weekday(day), is_closed=data.isClosed, is_24h=data.is24h)


@router.post("/{day}/blocks", status_code=201)
async def add_time_block(
    day: str,
    data: Optional[TimeBlockCreate] = None,
    service: ScheduleService = Depends(get_schedule_service),
):
    data = data or TimeBlockCreate()
    return service.add_block(_weekday(day), start=data.startTime, end=data.endTime)


@router.patch("/{day}/blocks/{index}")
async def update_time_block(
    day: str,
    index: int,
    data: TimeBlockUpdate,
    service: ScheduleService = Depends(get_schedule_service),
):
    try:
        return service.update_block(_weekday(day), index, start=data.startTime, end=data.endTime)
    except TimeRangeIndexError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.delete("/{day}/blocks/{index}")
async def delete_time_block(
    day: str,
    index: int,
    service: ScheduleService = Depends(get_schedule_service),
):
    try:
        return service.remove_block(_weekday(day), index)
    except TimeRangeIndexError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
