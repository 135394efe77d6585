"""Shop service - profile and delivery settings"""

import logging

from sqlalchemy.orm import Session

from ...models import ShopProfile
from .repository import DELIVERY_SETTINGS_KEY, ShopRepository
from .schemas import (
    ContactNumberSchema,
    DeliverySettingsSchema,
    LocationSchema,
    ShopProfileResponse,
    ShopProfileUpdate,
    SocialLinkSchema,
)

logger = logging.getLogger(__name__)


def profile_to_response(profile: ShopProfile) -> ShopProfileResponse:
    location = profile.location
    return ShopProfileResponse(
        id=profile.id,
        shopName=profile.shop_name,
        tagline=profile.tagline,
        shortDesc=profile.short_desc,
        aboutDesc=profile.about_desc,
        contacts=[
            ContactNumberSchema(type=c.type, label=c.label, number=c.number) for c in profile.contacts
        ],
        socials=[SocialLinkSchema(platform=s.platform, url=s.url) for s in profile.socials],
        location=LocationSchema(
            address=location.address,
            latitude=location.latitude,
            longitude=location.longitude,
            googleMapsUrl=location.google_maps_url,
        )
        if location
        else None,
    )


class ShopService:
    """Service layer for shop-wide settings"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ShopRepository()

    def get_profile(self) -> ShopProfileResponse:
        profile = self.repo.get_profile(self.db)
        if profile is None:
            return ShopProfileResponse()
        return profile_to_response(profile)

    def save_profile(self, data: ShopProfileUpdate) -> ShopProfileResponse:
        profile = self.repo.save_profile(
            self.db,
            profile_data={
                "shop_name": data.shopName,
                "tagline": data.tagline,
                "short_desc": data.shortDesc,
                "about_desc": data.aboutDesc,
            },
            contacts=[c.model_dump() for c in data.contacts],
            socials=[s.model_dump() for s in data.socials],
            location={
                "address": data.location.address,
                "latitude": data.location.latitude,
                "longitude": data.location.longitude,
                "google_maps_url": data.location.googleMapsUrl,
            }
            if data.location
            else None,
        )
        logger.info(f"✅ Shop profile saved: {profile.shop_name}")
        return profile_to_response(profile)

    def get_delivery_settings(self) -> DeliverySettingsSchema:
        stored = self.repo.get_setting(self.db, DELIVERY_SETTINGS_KEY)
        if not stored:
            return DeliverySettingsSchema()
        return DeliverySettingsSchema(**stored)

    def save_delivery_settings(self, data: DeliverySettingsSchema) -> DeliverySettingsSchema:
        self.repo.save_setting(self.db, DELIVERY_SETTINGS_KEY, data.model_dump())
        logger.info(f"🚚 Delivery settings saved ({data.estimate_label}, fee {data.deliveryCharges:g})")
        return data

    def delivery_quote(self, order_total: float) -> dict:
        settings = self.get_delivery_settings()
        fee = settings.fee_for(order_total)
        return {
            "orderTotal": order_total,
            "deliveryFee": fee,
            "total": order_total + fee,
            "estimatedTime": settings.estimate_label,
        }
