"""
Public storefront router.

Read-only views of the shop for the customer site: profile, opening hours,
whether the shop is open right now, the menu, deals and a coupon preview.
No authentication.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...config import CURRENCY
from ...database import get_db
from ..catalog.service import CatalogService
from ..coupons.schemas import CouponApplyRequest
from ..coupons.service import CouponService
from ..deals.service import DealService
from ..scheduling.service import ScheduleService
from ..shop.service import ShopService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/public", tags=["Storefront"])


@router.get("/shop")
async def get_public_shop(db: Session = Depends(get_db)):
    """Basic info, about text, contacts, location and socials"""
    shop = ShopService(db)
    profile = shop.get_profile()
    delivery = shop.get_delivery_settings()
    return {
        "basicInfo": {
            "shopName": profile.shopName,
            "tagline": profile.tagline,
            "shortDesc": profile.shortDesc,
        },
        "about": profile.aboutDesc,
        "contacts": [c.model_dump() for c in profile.contacts],
        "location": profile.location.model_dump() if profile.location else None,
        "socials": [s.model_dump() for s in profile.socials],
        "delivery": {
            "estimatedTime": delivery.estimate_label,
            "deliveryCharges": delivery.deliveryCharges,
            "freeDeliveryThreshold": delivery.freeDeliveryThreshold if delivery.enableFreeDelivery else None,
            "currency": CURRENCY,
        },
    }


@router.get("/status")
async def get_public_status(db: Session = Depends(get_db)):
    """Is the shop open right now, in the shop's own timezone"""
    return ScheduleService(db).current_status()


@router.get("/hours")
async def get_public_hours(db: Session = Depends(get_db)):
    return ScheduleService(db).public_hours()


@router.get("/menu")
async def get_public_menu(db: Session = Depends(get_db)):
    return CatalogService(db).menu()


@router.get("/deals")
async def get_public_deals(db: Session = Depends(get_db)):
    return [d.model_dump() for d in DealService(db).list_deals(status="active")]


@router.post("/coupons/apply")
async def apply_public_coupon(data: CouponApplyRequest, db: Session = Depends(get_db)):
    """Discount preview for the checkout; does not use up the coupon"""
    return CouponService(db).quote(data).to_dict()
