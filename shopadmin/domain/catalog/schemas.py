"""Catalog domain schemas - Pydantic models for categories and products"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import validate_url
from ...utils.sanitization import sanitize_string, validate_and_sanitize_input


def _required_name(v: str) -> str:
    cleaned = validate_and_sanitize_input(v, max_length=255)
    if not cleaned:
        raise ValueError("Name is required")
    return cleaned


class CategoryCreate(BaseModel):
    name: str
    description: Optional[str] = None
    imageUrl: Optional[str] = None
    isActive: bool = True

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return _required_name(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        return sanitize_string(v)

    @field_validator("imageUrl")
    @classmethod
    def validate_image_url(cls, v):
        return validate_url(v)


class CategoryUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    imageUrl: Optional[str] = None
    isActive: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if v is None:
            return v
        return _required_name(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        return sanitize_string(v)

    @field_validator("imageUrl")
    @classmethod
    def validate_image_url(cls, v):
        return validate_url(v)


class CategoryResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    imageUrl: Optional[str] = None
    isActive: bool
    productCount: int = 0
    created_at: Optional[datetime] = None


class ProductCreate(BaseModel):
    name: str
    price: float
    categoryId: Optional[str] = None
    description: Optional[str] = None
    imageUrl: Optional[str] = None
    isAvailable: bool = True
    stockQuantity: Optional[int] = None
    variants: list[str] = []

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return _required_name(v)

    @field_validator("price")
    @classmethod
    def validate_price(cls, v):
        if v <= 0:
            raise ValueError("Price must be greater than 0")
        return v

    @field_validator("stockQuantity")
    @classmethod
    def validate_stock(cls, v):
        if v is not None and v < 0:
            raise ValueError("Stock quantity cannot be negative")
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        return sanitize_string(v)

    @field_validator("imageUrl")
    @classmethod
    def validate_image_url(cls, v):
        return validate_url(v)

    @field_validator("variants")
    @classmethod
    def validate_variants(cls, v):
        return [validate_and_sanitize_input(item, max_length=100) for item in v if item and item.strip()]


class ProductUpdate(BaseModel):
    name: Optional[str] = None
    price: Optional[float] = None
    categoryId: Optional[str] = None
    description: Optional[str] = None
    imageUrl: Optional[str] = None
    isAvailable: Optional[bool] = None
    stockQuantity: Optional[int] = None
    variants: Optional[list[str]] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if v is None:
            return v
        return _required_name(v)

    @field_validator("price")
    @classmethod
    def validate_price(cls, v):
        if v is not None and v <= 0:
            raise ValueError("Price must be greater than 0")
        return v

    @field_validator("stockQuantity")
    @classmethod
    def validate_stock(cls, v):
        if v is not None and v < 0:
            raise ValueError("Stock quantity cannot be negative")
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        return sanitize_string(v)

    @field_validator("imageUrl")
    @classmethod
    def validate_image_url(cls, v):
        return validate_url(v)

    @field_validator("variants")
    @classmethod
    def validate_variants(cls, v):
        if v is None:
            return v
        return [validate_and_sanitize_input(item, max_length=100) for item in v if item and item.strip()]


class ProductResponse(BaseModel):
    id: str
    name: str
    price: float
    categoryId: Optional[str] = None
    categoryName: Optional[str] = None
    description: Optional[str] = None
    imageUrl: Optional[str] = None
    isAvailable: bool
    stockQuantity: Optional[int] = None
    variants: list[str] = []
    created_at: Optional[datetime] = None
