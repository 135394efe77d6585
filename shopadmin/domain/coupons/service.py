"""Coupon service - Business logic for coupons"""

import logging
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import SHOP_TIMEZONE
from ...models import Coupon
from ..shop.service import ShopService
from .discounts import (
    CouponQuote,
    CouponRejected,
    calculate_discount,
    check_eligibility,
    generate_code,
)
from .repository import CouponRepository
from .schemas import CouponApplyRequest, CouponCreate, CouponResponse, CouponUpdate

logger = logging.getLogger(__name__)

# request field -> column
COUPON_FIELDS = {
    "code": "code",
    "name": "name",
    "description": "description",
    "discountType": "discount_type",
    "discountValue": "discount_value",
    "minOrderAmount": "min_order_amount",
    "maxDiscountAmount": "max_discount_amount",
    "usageLimit": "usage_limit",
    "status": "status",
    "startDate": "start_date",
    "endDate": "end_date",
    "isFirstOrderOnly": "is_first_order_only",
    "applicableCategories": "applicable_categories",
}

MAX_CODE_ATTEMPTS = 10


def coupon_to_response(coupon: Coupon) -> CouponResponse:
    return CouponResponse(
        id=coupon.id,
        usedCount=coupon.used_count or 0,
        created_at=coupon.created_at,
        **{field: getattr(coupon, column) for field, column in COUPON_FIELDS.items()},
    )


def shop_today() -> date:
    return datetime.now(ZoneInfo(SHOP_TIMEZONE)).date()


class CouponService:
    """Service layer for coupon business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CouponRepository()

    def list_coupons(self, status: Optional[str] = None) -> list[Coupon]:
        return self.repo.get_coupons(self.db, status=status)

    def get_coupon(self, coupon_id: str) -> Coupon:
        coupon = self.repo.get_coupon_by_id(self.db, coupon_id)
        if not coupon:
            raise HTTPException(status_code=404, detail="Coupon not found")
        return coupon

    def _ensure_unique_code(self, code: str, exclude_id: Optional[str] = None) -> None:
        existing = self.repo.get_coupon_by_code(self.db, code)
        if existing and existing.id != exclude_id:
            raise HTTPException(status_code=409, detail=f"Coupon code {code} already exists")

    def generate_unique_code(self) -> str:
        for _ in range(MAX_CODE_ATTEMPTS):
            code = generate_code()
            if not self.repo.get_coupon_by_code(self.db, code):
                return code
        raise HTTPException(status_code=500, detail="Could not generate a unique coupon code")

    def create_coupon(self, data: CouponCreate) -> Coupon:
        self._ensure_unique_code(data.code)
        fields = {column: getattr(data, field) for field, column in COUPON_FIELDS.items()}
        coupon = self.repo.create_coupon(self.db, used_count=0, **fields)
        logger.info(f"🎟️ Created coupon {coupon.code} ({coupon.discount_type} {coupon.discount_value:g})")
        return coupon

    def update_coupon(self, coupon_id: str, data: CouponUpdate) -> Coupon:
        coupon = self.get_coupon(coupon_id)
        provided = data.model_dump(exclude_unset=True)
        if provided.get("code"):
            self._ensure_unique_code(provided["code"], exclude_id=coupon.id)

        merged = {column: getattr(coupon, column) for column in COUPON_FIELDS.values()}
        merged.update({COUPON_FIELDS[field]: value for field, value in provided.items()})
        for required in ("code", "name", "discount_type", "discount_value", "status", "is_first_order_only"):
            if merged[required] is None:
                raise HTTPException(status_code=400, detail=f"{required} cannot be empty")

        try:
            CouponCreate(
                code=merged["code"],
                name=merged["name"],
                discountType=merged["discount_type"],
                discountValue=merged["discount_value"],
                minOrderAmount=merged["min_order_amount"],
                maxDiscountAmount=merged["max_discount_amount"],
                usageLimit=merged["usage_limit"],
                startDate=merged["start_date"],
                endDate=merged["end_date"],
            )
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        return self.repo.update_coupon(self.db, coupon, **merged)

    def delete_coupon(self, coupon_id: str) -> dict:
        coupon = self.get_coupon(coupon_id)
        self.repo.delete_coupon(self.db, coupon)
        logger.info(f"🗑️ Deleted coupon {coupon.code}")
        return {"message": "Coupon deleted"}

    # ------------------------------------------------------------------
    # Checkout
    # ------------------------------------------------------------------

    def quote(self, data: CouponApplyRequest, today: Optional[date] = None) -> CouponQuote:
        """Preview what a coupon takes off an order. Does not count as a use."""
        coupon = self.repo.get_coupon_by_code(self.db, data.code)
        if not coupon:
            raise HTTPException(status_code=404, detail="Invalid coupon code")

        try:
            check_eligibility(
                status=coupon.status,
                order_amount=data.orderAmount,
                today=today or shop_today(),
                start_date=coupon.start_date,
                end_date=coupon.end_date,
                usage_limit=coupon.usage_limit,
                used_count=coupon.used_count or 0,
                min_order_amount=coupon.min_order_amount,
                is_first_order_only=coupon.is_first_order_only,
                is_first_order=data.isFirstOrder,
            )
        except CouponRejected as e:
            logger.info(f"🎟️ Coupon {coupon.code} rejected: {e}")
            raise HTTPException(status_code=400, detail=str(e)) from e

        delivery_fee = ShopService(self.db).get_delivery_settings().fee_for(data.orderAmount)
        discount = calculate_discount(
            coupon.discount_type,
            coupon.discount_value,
            data.orderAmount,
            max_discount_amount=coupon.max_discount_amount,
            delivery_fee=delivery_fee,
        )
        free_delivery = coupon.discount_type == "free_delivery"
        final = data.orderAmount if free_delivery else data.orderAmount - discount
        return CouponQuote(
            code=coupon.code,
            discount=discount,
            free_delivery=free_delivery,
            order_amount=data.orderAmount,
            final_amount=round(final, 2),
        )

    def redeem(self, code: str) -> Coupon:
        """Stage one use of a coupon for an order being placed. The caller commits both together."""
        coupon = self.repo.get_coupon_by_code(self.db, code)
        if not coupon:
            raise HTTPException(status_code=404, detail="Invalid coupon code")
        coupon = self.repo.increment_usage(self.db, coupon)
        logger.info(f"🎟️ Coupon {coupon.code} used ({coupon.used_count}/{coupon.usage_limit or '∞'})")
        return coupon
