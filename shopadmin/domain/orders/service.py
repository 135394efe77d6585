"""Order service - Business logic for orders"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import Order
from ...shared.errors import PersistenceError
from ..coupons.schemas import CouponApplyRequest
from ..coupons.service import CouponService
from ..riders.repository import RiderRepository
from .repository import OrderRepository
from .schemas import OrderCreate, OrderResponse, next_statuses

logger = logging.getLogger(__name__)


def order_to_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=order.id,
        customerName=order.customer_name,
        phone=order.phone,
        address=order.address,
        items=order.items or [],
        total=order.total,
        status=order.status,
        nextStatuses=next_statuses(order.status),
        riderId=order.rider_id,
        riderName=order.rider.name if order.rider else None,
        couponCode=order.coupon_code,
        notes=order.notes,
        created_at=order.created_at,
    )


class OrderService:
    """Service layer for order business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderRepository()
        self.riders = RiderRepository()

    def list_orders(self, status: Optional[str] = None, rider_id: Optional[str] = None) -> list[Order]:
        return self.repo.get_orders(self.db, status=status, rider_id=rider_id)

    def get_order(self, order_id: str) -> Order:
        order = self.repo.get_order_by_id(self.db, order_id)
        if not order:
            raise HTTPException(status_code=404, detail="Order not found")
        return order

    def _ensure_rider(self, rider_id: Optional[str]) -> None:
        if rider_id and not self.riders.get_rider_by_id(self.db, rider_id):
            raise HTTPException(status_code=400, detail="Rider does not exist")

    def create_order(self, data: OrderCreate) -> Order:
        """Place an order. The coupon use and the order row are committed together."""
        self._ensure_rider(data.riderId)
        coupons = CouponService(self.db) if data.couponCode else None
        if coupons:
            is_first_order = not self.repo.has_orders_for_phone(self.db, data.phone)
            coupons.quote(
                CouponApplyRequest(code=data.couponCode, orderAmount=data.total, isFirstOrder=is_first_order)
            )

        try:
            if coupons:
                coupons.redeem(data.couponCode)
            order = self.repo.create_order(
                self.db,
                customer_name=data.customerName,
                phone=data.phone,
                address=data.address,
                items=data.items,
                total=data.total,
                status="processing",
                rider_id=data.riderId,
                coupon_code=data.couponCode,
                notes=data.notes,
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to create order for {data.customerName}: {e}")
            raise PersistenceError("create order", str(e)) from e

        self.db.refresh(order)
        logger.info(f"📦 Order {order.id} created for {order.customer_name} ({order.total:g})")
        return order

    def update_status(self, order_id: str, status: str) -> Order:
        order = self.get_order(order_id)
        previous = order.status
        if status == previous:
            return order

        order = self.repo.update_order(self.db, order, status=status)
        if order.rider and (status == "delivered") != (previous == "delivered"):
            delta = 1 if status == "delivered" else -1
            self.riders.update_rider(
                self.db, order.rider, orders_completed=max((order.rider.orders_completed or 0) + delta, 0)
            )
        logger.info(f"🔄 Order {order_id} status: {previous} → {status}")
        return order

    def assign_rider(self, order_id: str, rider_id: Optional[str]) -> Order:
        order = self.get_order(order_id)
        self._ensure_rider(rider_id)
        order = self.repo.update_order(self.db, order, rider_id=rider_id)
        logger.info(f"🛵 Order {order_id} assigned to rider {rider_id}")
        return order

    def delete_order(self, order_id: str) -> dict:
        order = self.get_order(order_id)
        self.repo.delete_order(self.db, order)
        return {"message": "Order deleted"}
