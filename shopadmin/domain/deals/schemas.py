"""Deal domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, field_validator, model_validator

from ...shared.validators import validate_hhmm, validate_iso_date, validate_url
from ...utils.sanitization import validate_and_sanitize_input

DealStatus = Literal["active", "draft", "ended"]
PricingMode = Literal["fixed", "calculated"]


class DealItem(BaseModel):
    product: str
    quantity: int = 1
    variant: Optional[str] = None

    @field_validator("product")
    @classmethod
    def validate_product(cls, v):
        if not v or not v.strip():
            raise ValueError("Product is required")
        return v.strip()

    @field_validator("quantity")
    @classmethod
    def validate_quantity(cls, v):
        if v < 1:
            raise ValueError("Quantity must be at least 1")
        return v


class DealAddon(BaseModel):
    name: str
    price: float = 0

    @field_validator("price")
    @classmethod
    def validate_price(cls, v):
        if v < 0:
            raise ValueError("Add-on price cannot be negative")
        return v


def _check_pricing(price, offer_price, discount_percent):
    if price is not None and price < 0:
        raise ValueError("Price cannot be negative")
    if offer_price is not None and price is not None and offer_price > price:
        raise ValueError("Offer price cannot be higher than the regular price")
    if discount_percent is not None and not 0 <= discount_percent <= 100:
        raise ValueError("Discount must be between 0 and 100 percent")


class DealCreate(BaseModel):
    """Schema for creating a deal"""

    name: str
    category: str
    status: DealStatus = "active"
    items: list[DealItem]
    pricingMode: PricingMode = "fixed"
    price: Optional[float] = None
    offerPrice: Optional[float] = None
    discountPercent: Optional[float] = None
    countStock: bool = True
    enableAddons: bool = False
    addons: list[DealAddon] = []
    imageUrl: Optional[str] = None
    startDate: Optional[str] = None
    endDate: Optional[str] = None
    startTime: Optional[str] = None
    endTime: Optional[str] = None

    @field_validator("name", "category")
    @classmethod
    def validate_required_text(cls, v):
        cleaned = validate_and_sanitize_input(v, max_length=255)
        if not cleaned:
            raise ValueError("Field is required")
        return cleaned

    @field_validator("items")
    @classmethod
    def validate_items(cls, v):
        if not v:
            raise ValueError("A deal needs at least one item")
        return v

    @field_validator("imageUrl")
    @classmethod
    def validate_image_url(cls, v):
        return validate_url(v)

    @field_validator("startDate", "endDate")
    @classmethod
    def validate_dates(cls, v):
        return validate_iso_date(v)

    @field_validator("startTime", "endTime")
    @classmethod
    def validate_times(cls, v):
        return validate_hhmm(v)

    @model_validator(mode="after")
    def check_pricing(self):
        _check_pricing(self.price, self.offerPrice, self.discountPercent)
        if self.pricingMode == "fixed" and not self.price:
            raise ValueError("A fixed-price deal needs a regular price")
        if self.startDate and self.endDate and self.endDate < self.startDate:
            raise ValueError("End date cannot be before start date")
        return self


class DealUpdate(BaseModel):
    """Schema for updating a deal; omitted fields keep their value"""

    name: Optional[str] = None
    category: Optional[str] = None
    status: Optional[DealStatus] = None
    items: Optional[list[DealItem]] = None
    pricingMode: Optional[PricingMode] = None
    price: Optional[float] = None
    offerPrice: Optional[float] = None
    discountPercent: Optional[float] = None
    countStock: Optional[bool] = None
    enableAddons: Optional[bool] = None
    addons: Optional[list[DealAddon]] = None
    imageUrl: Optional[str] = None
    startDate: Optional[str] = None
    endDate: Optional[str] = None
    startTime: Optional[str] = None
    endTime: Optional[str] = None

    @field_validator("name", "category")
    @classmethod
    def validate_required_text(cls, v):
        if v is None:
            return v
        cleaned = validate_and_sanitize_input(v, max_length=255)
        if not cleaned:
            raise ValueError("Field cannot be empty")
        return cleaned

    @field_validator("items")
    @classmethod
    def validate_items(cls, v):
        if v is not None and not v:
            raise ValueError("A deal needs at least one item")
        return v

    @field_validator("imageUrl")
    @classmethod
    def validate_image_url(cls, v):
        return validate_url(v)

    @field_validator("startDate", "endDate")
    @classmethod
    def validate_dates(cls, v):
        return validate_iso_date(v)

    @field_validator("startTime", "endTime")
    @classmethod
    def validate_times(cls, v):
        return validate_hhmm(v)

    @model_validator(mode="after")
    def check_pricing(self):
        _check_pricing(self.price, self.offerPrice, self.discountPercent)
        return self


class DealResponse(BaseModel):
    id: str
    name: str
    category: str
    status: str
    items: list[DealItem]
    pricingMode: str
    price: float
    offerPrice: Optional[float] = None
    discountPercent: Optional[float] = None
    subtotal: float = 0
    finalPrice: float = 0
    countStock: bool
    enableAddons: bool = False
    addons: list[DealAddon] = []
    imageUrl: Optional[str] = None
    startDate: Optional[str] = None
    endDate: Optional[str] = None
    startTime: Optional[str] = None
    endTime: Optional[str] = None
    created_at: Optional[datetime] = None


class PricePreviewRequest(BaseModel):
    items: list[DealItem]
    pricingMode: PricingMode = "calculated"
    price: Optional[float] = None
    offerPrice: Optional[float] = None
    discountPercent: Optional[float] = None

    @model_validator(mode="after")
    def check_pricing(self):
        _check_pricing(self.price, self.offerPrice, self.discountPercent)
        return self


class BulkDeleteRequest(BaseModel):
    ids: list[str]
