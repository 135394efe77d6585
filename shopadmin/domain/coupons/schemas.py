"""Coupon domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, field_validator, model_validator

from ...shared.validators import validate_iso_date
from ...utils.sanitization import sanitize_string, validate_and_sanitize_input

DiscountType = Literal["percentage", "fixed_amount", "free_delivery"]
CouponStatus = Literal["active", "inactive", "expired"]


def _normalize_code(v: str) -> str:
    code = (v or "").strip().upper()
    if not code:
        raise ValueError("Coupon code is required")
    if not code.isalnum() or len(code) > 50:
        raise ValueError("Coupon code may only contain letters and digits (max 50)")
    return code


def _check_discount(discount_type, discount_value):
    if discount_value is None:
        return
    if discount_type != "free_delivery" and discount_value <= 0:
        raise ValueError("Discount value must be greater than 0")
    if discount_type == "percentage" and discount_value > 100:
        raise ValueError("Percentage discount cannot exceed 100%")


class CouponCreate(BaseModel):
    code: str
    name: str
    description: Optional[str] = None
    discountType: DiscountType = "percentage"
    discountValue: float = 0
    minOrderAmount: Optional[float] = None
    maxDiscountAmount: Optional[float] = None
    usageLimit: Optional[int] = None
    status: CouponStatus = "active"
    startDate: Optional[str] = None
    endDate: Optional[str] = None
    isFirstOrderOnly: bool = False
    applicableCategories: Optional[list[str]] = None

    @field_validator("code")
    @classmethod
    def validate_code(cls, v):
        return _normalize_code(v)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        cleaned = validate_and_sanitize_input(v, max_length=255)
        if not cleaned:
            raise ValueError("Coupon name is required")
        return cleaned

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        return sanitize_string(v)

    @field_validator("minOrderAmount", "maxDiscountAmount")
    @classmethod
    def validate_amounts(cls, v):
        if v is not None and v < 0:
            raise ValueError("Amount cannot be negative")
        return v

    @field_validator("usageLimit")
    @classmethod
    def validate_usage_limit(cls, v):
        if v is not None and v < 1:
            raise ValueError("Usage limit must be at least 1")
        return v

    @field_validator("startDate", "endDate")
    @classmethod
    def validate_dates(cls, v):
        return validate_iso_date(v)

    @model_validator(mode="after")
    def check_coupon(self):
        _check_discount(self.discountType, self.discountValue)
        if self.startDate and self.endDate and self.endDate < self.startDate:
            raise ValueError("End date cannot be before start date")
        return self


class CouponUpdate(BaseModel):
    code: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    discountType: Optional[DiscountType] = None
    discountValue: Optional[float] = None
    minOrderAmount: Optional[float] = None
    maxDiscountAmount: Optional[float] = None
    usageLimit: Optional[int] = None
    status: Optional[CouponStatus] = None
    startDate: Optional[str] = None
    endDate: Optional[str] = None
    isFirstOrderOnly: Optional[bool] = None
    applicableCategories: Optional[list[str]] = None

    @field_validator("code")
    @classmethod
    def validate_code(cls, v):
        if v is None:
            return v
        return _normalize_code(v)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if v is None:
            return v
        cleaned = validate_and_sanitize_input(v, max_length=255)
        if not cleaned:
            raise ValueError("Coupon name cannot be empty")
        return cleaned

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        return sanitize_string(v)

    @field_validator("startDate", "endDate")
    @classmethod
    def validate_dates(cls, v):
        return validate_iso_date(v)


class CouponResponse(BaseModel):
    id: str
    code: str
    name: str
    description: Optional[str] = None
    discountType: str
    discountValue: float
    minOrderAmount: Optional[float] = None
    maxDiscountAmount: Optional[float] = None
    usageLimit: Optional[int] = None
    usedCount: int = 0
    status: str
    startDate: Optional[str] = None
    endDate: Optional[str] = None
    isFirstOrderOnly: bool = False
    applicableCategories: Optional[list[str]] = None
    created_at: Optional[datetime] = None


class CouponApplyRequest(BaseModel):
    code: str
    orderAmount: float
    isFirstOrder: bool = True

    @field_validator("code")
    @classmethod
    def validate_code(cls, v):
        return _normalize_code(v)

    @field_validator("orderAmount")
    @classmethod
    def validate_order_amount(cls, v):
        if v <= 0:
            raise ValueError("Order amount must be greater than 0")
        return v
