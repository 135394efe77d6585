"""Order domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import validate_phone
from ...utils.sanitization import sanitize_string, validate_and_sanitize_input

ORDER_STATUSES = ("processing", "out_for_delivery", "delivered", "canceled")
OrderStatus = Literal["processing", "out_for_delivery", "delivered", "canceled"]


def next_statuses(current: str) -> list[str]:
    """Statuses an order can be moved to from ``current``: any other one"""
    return [status for status in ORDER_STATUSES if status != current]


class OrderCreate(BaseModel):
    customerName: str
    phone: str
    address: str
    items: list[str]
    total: float
    riderId: Optional[str] = None
    couponCode: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("customerName", "address")
    @classmethod
    def validate_required_text(cls, v):
        cleaned = validate_and_sanitize_input(v, max_length=500)
        if not cleaned:
            raise ValueError("Field is required")
        return cleaned

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        if not v or not v.strip():
            raise ValueError("Phone number is required")
        return validate_phone(v)

    @field_validator("items")
    @classmethod
    def validate_items(cls, v):
        items = [validate_and_sanitize_input(item, max_length=255) for item in v if item and item.strip()]
        if not items:
            raise ValueError("An order needs at least one item")
        return items

    @field_validator("total")
    @classmethod
    def validate_total(cls, v):
        if v <= 0:
            raise ValueError("Order total must be greater than 0")
        return v

    @field_validator("couponCode")
    @classmethod
    def validate_coupon_code(cls, v):
        return v.strip().upper() if v and v.strip() else None

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, v):
        return sanitize_string(v)


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class RiderAssignment(BaseModel):
    riderId: Optional[str] = None


class OrderResponse(BaseModel):
    id: str
    customerName: str
    phone: str
    address: str
    items: list[str]
    total: float
    status: str
    nextStatuses: list[str]
    riderId: Optional[str] = None
    riderName: Optional[str] = None
    couponCode: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
