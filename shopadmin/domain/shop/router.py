"""Shop router - profile and delivery settings endpoints"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_admin
from ...database import get_db
from .schemas import DeliverySettingsSchema, ShopProfileResponse, ShopProfileUpdate
from .service import ShopService

router = APIRouter(prefix="/shop", tags=["Shop"], dependencies=[Depends(get_current_admin)])


def get_shop_service(db: Session = Depends(get_db)) -> ShopService:
    """Dependency injection for ShopService"""
    return ShopService(db)


@router.get("/profile", response_model=ShopProfileResponse)
async def get_shop_profile(service: ShopService = Depends(get_shop_service)):
    return service.get_profile()


@router.put("/profile", response_model=ShopProfileResponse)
async def save_shop_profile(data: ShopProfileUpdate, service: ShopService = Depends(get_shop_service)):
    """Save basic info, contact numbers, social links and location in one go"""
    return service.save_profile(data)


@router.get("/delivery-settings", response_model=DeliverySettingsSchema)
async def get_delivery_settings(service: ShopService = Depends(get_shop_service)):
    return service.get_delivery_settings()


@router.put("/delivery-settings", response_model=DeliverySettingsSchema)
async def save_delivery_settings(
    data: DeliverySettingsSchema,
    service: ShopService = Depends(get_shop_service),
):
    return service.save_delivery_settings(data)


@router.get("/delivery-settings/quote")
async def get_delivery_quote(
    orderTotal: float = Query(..., gt=0),
    service: ShopService = Depends(get_shop_service),
):
    return service.delivery_quote(orderTotal)
