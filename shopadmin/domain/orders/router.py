"""Order router - FastAPI endpoints for orders"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_admin
from ...database import get_db
from .schemas import OrderCreate, OrderResponse, OrderStatusUpdate, RiderAssignment
from .service import OrderService, order_to_response

router = APIRouter(prefix="/orders", tags=["Orders"], dependencies=[Depends(get_current_admin)])


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    """Dependency injection for OrderService"""
    return OrderService(db)


@router.get("", response_model=list[OrderResponse])
async def list_orders(
    status: Optional[str] = Query(None, pattern="^(processing|out_for_delivery|delivered|canceled)$"),
    rider_id: Optional[str] = Query(None, alias="riderId"),
    service: OrderService = Depends(get_order_service),
):
    return [order_to_response(o) for o in service.list_orders(status=status, rider_id=rider_id)]


@router.post("", response_model=OrderResponse, status_code=201)
async def create_order(data: OrderCreate, service: OrderService = Depends(get_order_service)):
    return order_to_response(service.create_order(data))


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, service: OrderService = Depends(get_order_service)):
    return order_to_response(service.get_order(order_id))


@router.patch("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    data: OrderStatusUpdate,
    service: OrderService = Depends(get_order_service),
):
    return order_to_response(service.update_status(order_id, data.status))


@router.patch("/{order_id}/rider", response_model=OrderResponse)
async def assign_order_rider(
    order_id: str,
    data: RiderAssignment,
    service: OrderService = Depends(get_order_service),
):
    return order_to_response(service.assign_rider(order_id, data.riderId))


@router.delete("/{order_id}")
async def delete_order(order_id: str, service: OrderService = Depends(get_order_service)):
    return service.delete_order(order_id)
