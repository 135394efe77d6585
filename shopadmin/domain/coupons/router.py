"""Coupon router - FastAPI endpoints for coupons"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_admin
from ...database import get_db
from .schemas import CouponApplyRequest, CouponCreate, CouponResponse, CouponUpdate
from .service import CouponService, coupon_to_response

router = APIRouter(prefix="/coupons", tags=["Coupons"], dependencies=[Depends(get_current_admin)])


def get_coupon_service(db: Session = Depends(get_db)) -> CouponService:
    """Dependency injection for CouponService"""
    return CouponService(db)


@router.get("", response_model=list[CouponResponse])
async def list_coupons(
    status: Optional[str] = Query(None, pattern="^(active|inactive|expired)$"),
    service: CouponService = Depends(get_coupon_service),
):
    return [coupon_to_response(c) for c in service.list_coupons(status=status)]


@router.get("/generate-code")
async def generate_coupon_code(service: CouponService = Depends(get_coupon_service)):
    """A fresh 8 character code not used by any coupon"""
    return {"code": service.generate_unique_code()}


@router.post("/validate")
async def validate_coupon(data: CouponApplyRequest, service: CouponService = Depends(get_coupon_service)):
    return service.quote(data).to_dict()


@router.post("", response_model=CouponResponse, status_code=201)
async def create_coupon(data: CouponCreate, service: CouponService = Depends(get_coupon_service)):
    return coupon_to_response(service.create_coupon(data))


@router.get("/{coupon_id}", response_model=CouponResponse)
async def get_coupon(coupon_id: str, service: CouponService = Depends(get_coupon_service)):
    return coupon_to_response(service.get_coupon(coupon_id))


@router.put("/{coupon_id}", response_model=CouponResponse)
async def update_coupon(
    coupon_id: str,
    data: CouponUpdate,
    service: CouponService = Depends(get_coupon_service),
):
    return coupon_to_response(service.update_coupon(coupon_id, data))


@router.delete("/{coupon_id}")
async def delete_coupon(coupon_id: str, service: CouponService = Depends(get_coupon_service)):
    return service.delete_coupon(coupon_id)
