"""Rider router - FastAPI endpoints for riders"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_admin
from ...database import get_db
from .schemas import RiderCreate, RiderResponse, RiderStatusUpdate, RiderUpdate
from .service import RiderService, rider_to_response

router = APIRouter(prefix="/riders", tags=["Riders"], dependencies=[Depends(get_current_admin)])


def get_rider_service(db: Session = Depends(get_db)) -> RiderService:
    """Dependency injection for RiderService"""
    return RiderService(db)


@router.get("", response_model=list[RiderResponse])
async def list_riders(
    status: Optional[str] = Query(None, pattern="^(active|offline|busy)$"),
    service: RiderService = Depends(get_rider_service),
):
    return [rider_to_response(r) for r in service.list_riders(status=status)]


@router.post("", response_model=RiderResponse, status_code=201)
async def create_rider(data: RiderCreate, service: RiderService = Depends(get_rider_service)):
    return rider_to_response(service.create_rider(data))


@router.get("/{rider_id}", response_model=RiderResponse)
async def get_rider(rider_id: str, service: RiderService = Depends(get_rider_service)):
    return rider_to_response(service.get_rider(rider_id))


@router.put("/{rider_id}", response_model=RiderResponse)
async def update_rider(rider_id: str, data: RiderUpdate, service: RiderService = Depends(get_rider_service)):
    return rider_to_response(service.update_rider(rider_id, data))


@router.patch("/{rider_id}/status", response_model=RiderResponse)
async def update_rider_status(
    rider_id: str,
    data: RiderStatusUpdate,
    service: RiderService = Depends(get_rider_service),
):
    return rider_to_response(service.set_status(rider_id, data.status))


@router.delete("/{rider_id}")
async def delete_rider(rider_id: str, service: RiderService = Depends(get_rider_service)):
    return service.delete_rider(rider_id)
