"""Deal router - FastAPI endpoints for deals"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ...auth import get_current_admin
from ...database import get_db
from .schemas import BulkDeleteRequest, DealCreate, DealResponse, DealStatus, DealUpdate, PricePreviewRequest
from .service import DealService

router = APIRouter(prefix="/deals", tags=["Deals"], dependencies=[Depends(get_current_admin)])


def get_deal_service(db: Session = Depends(get_db)) -> DealService:
    """Dependency injection for DealService"""
    return DealService(db)


class DealStatusUpdate(BaseModel):
    status: DealStatus


@router.get("", response_model=list[DealResponse])
async def list_deals(
    status: Optional[str] = Query(None, pattern="^(active|draft|ended)$"),
    service: DealService = Depends(get_deal_service),
):
    return service.list_deals(status=status)


@router.post("", response_model=DealResponse, status_code=201)
async def create_deal(data: DealCreate, service: DealService = Depends(get_deal_service)):
    return service.create_deal(data)


@router.post("/price-preview")
async def preview_deal_price(data: PricePreviewRequest, service: DealService = Depends(get_deal_service)):
    """Subtotal, final price and savings for a set of items without saving anything"""
    return service.preview_price(data)


@router.post("/bulk-delete")
async def bulk_delete_deals(data: BulkDeleteRequest, service: DealService = Depends(get_deal_service)):
    return service.bulk_delete(data.ids)


@router.get("/{deal_id}", response_model=DealResponse)
async def get_deal(deal_id: str, service: DealService = Depends(get_deal_service)):
    return service.to_response(service.get_deal(deal_id))


@router.put("/{deal_id}", response_model=DealResponse)
async def update_deal(deal_id: str, data: DealUpdate, service: DealService = Depends(get_deal_service)):
    return service.update_deal(deal_id, data)


@router.patch("/{deal_id}/status", response_model=DealResponse)
async def update_deal_status(
    deal_id: str,
    data: DealStatusUpdate,
    service: DealService = Depends(get_deal_service),
):
    return service.set_status(deal_id, data.status)


@router.delete("/{deal_id}")
async def delete_deal(deal_id: str, service: DealService = Depends(get_deal_service)):
    return service.delete_deal(deal_id)
