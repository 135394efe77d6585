"""Shop domain schemas - profile and delivery settings"""

from typing import Literal, Optional

from pydantic import BaseModel, field_validator, model_validator

from ...shared.validators import validate_phone, validate_url
from ...utils.sanitization import sanitize_string, validate_and_sanitize_input


class ContactNumberSchema(BaseModel):
    type: Literal["phone", "whatsapp"] = "phone"
    label: Optional[str] = None
    number: str

    @field_validator("number")
    @classmethod
    def validate_number(cls, v):
        if not v or not v.strip():
            raise ValueError("Contact number is required")
        return validate_phone(v)

    @field_validator("label")
    @classmethod
    def validate_label(cls, v):
        return sanitize_string(v)


class SocialLinkSchema(BaseModel):
    platform: str
    url: str

    @field_validator("platform")
    @classmethod
    def validate_platform(cls, v):
        cleaned = validate_and_sanitize_input(v, max_length=50)
        if not cleaned:
            raise ValueError("Platform is required")
        return cleaned.lower()

    @field_validator("url")
    @classmethod
    def validate_link(cls, v):
        if not v:
            raise ValueError("URL is required")
        return validate_url(v)


class LocationSchema(BaseModel):
    address: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    googleMapsUrl: Optional[str] = None

    @field_validator("address")
    @classmethod
    def validate_address(cls, v):
        cleaned = validate_and_sanitize_input(v, max_length=500)
        if not cleaned:
            raise ValueError("Address is required")
        return cleaned

    @field_validator("latitude")
    @classmethod
    def validate_latitude(cls, v):
        if v is not None and not -90 <= v <= 90:
            raise ValueError("Latitude must be between -90 and 90")
        return v

    @field_validator("longitude")
    @classmethod
    def validate_longitude(cls, v):
        if v is not None and not -180 <= v <= 180:
            raise ValueError("Longitude must be between -180 and 180")
        return v

    @field_validator("googleMapsUrl")
    @classmethod
    def validate_maps_url(cls, v):
        return validate_url(v)


class ShopProfileUpdate(BaseModel):
    """Full profile save; contacts and socials replace what is stored"""

    shopName: str
    tagline: Optional[str] = None
    shortDesc: Optional[str] = None
    aboutDesc: Optional[str] = None
    contacts: list[ContactNumberSchema] = []
    socials: list[SocialLinkSchema] = []
    location: Optional[LocationSchema] = None

    @field_validator("shopName")
    @classmethod
    def validate_shop_name(cls, v):
        cleaned = validate_and_sanitize_input(v, max_length=255)
        if not cleaned:
            raise ValueError("Shop name is required")
        return cleaned

    @field_validator("tagline")
    @classmethod
    def validate_tagline(cls, v):
        return validate_and_sanitize_input(v, max_length=255) or None

    @field_validator("shortDesc", "aboutDesc")
    @classmethod
    def validate_descriptions(cls, v):
        return validate_and_sanitize_input(v, max_length=5000) or None


class ShopProfileResponse(BaseModel):
    id: Optional[str] = None
    shopName: str = ""
    tagline: Optional[str] = None
    shortDesc: Optional[str] = None
    aboutDesc: Optional[str] = None
    contacts: list[ContactNumberSchema] = []
    socials: list[SocialLinkSchema] = []
    location: Optional[LocationSchema] = None


class DeliverySettingsSchema(BaseModel):
    """Stored under shop_settings.delivery_settings"""

    minDeliveryTime: int = 25
    maxDeliveryTime: int = 30
    deliveryCharges: float = 150
    freeDeliveryThreshold: Optional[float] = None
    enableFreeDelivery: bool = False
    deliveryRadius: Optional[float] = None

    @field_validator("minDeliveryTime")
    @classmethod
    def validate_min_time(cls, v):
        if v < 1:
            raise ValueError("Minimum delivery time must be at least 1 minute")
        return v

    @field_validator("deliveryCharges")
    @classmethod
    def validate_charges(cls, v):
        if v < 0:
            raise ValueError("Delivery charges cannot be negative")
        return v

    @field_validator("freeDeliveryThreshold", "deliveryRadius")
    @classmethod
    def validate_non_negative(cls, v):
        if v is not None and v < 0:
            raise ValueError("Value cannot be negative")
        return v

    @model_validator(mode="after")
    def check_delivery_window(self):
        if self.maxDeliveryTime <= self.minDeliveryTime:
            raise ValueError("Maximum delivery time must be greater than minimum delivery time")
        if self.enableFreeDelivery and self.freeDeliveryThreshold is None:
            raise ValueError("Set a free delivery threshold to enable free delivery")
        return self

    def fee_for(self, order_total: float) -> float:
        """Delivery charge for an order of this size"""
        if self.enableFreeDelivery and order_total >= (self.freeDeliveryThreshold or 0):
            return 0
        return self.deliveryCharges

    @property
    def estimate_label(self) -> str:
        return f"{self.minDeliveryTime}-{self.maxDeliveryTime} mins"
