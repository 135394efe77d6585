"""Rider domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import validate_phone
from ...utils.sanitization import validate_and_sanitize_input

RiderStatus = Literal["active", "offline", "busy"]

MIN_PASSWORD_LENGTH = 6


def _check_password(v: str) -> str:
    if len(v) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if len(v.encode()) > 72:
        raise ValueError("Password is too long")
    return v


class RiderCreate(BaseModel):
    name: str
    phone: str
    password: str
    status: RiderStatus = "offline"

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        cleaned = validate_and_sanitize_input(v, max_length=255)
        if not cleaned:
            raise ValueError("Rider name is required")
        return cleaned

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        if not v or not v.strip():
            raise ValueError("Phone number is required")
        return validate_phone(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        return _check_password(v)


class RiderUpdate(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    password: Optional[str] = None
    status: Optional[RiderStatus] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if v is None:
            return v
        cleaned = validate_and_sanitize_input(v, max_length=255)
        if not cleaned:
            raise ValueError("Rider name cannot be empty")
        return cleaned

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        if v is None:
            return v
        return validate_phone(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        if v is None:
            return v
        return _check_password(v)


class RiderStatusUpdate(BaseModel):
    status: RiderStatus


class RiderResponse(BaseModel):
    """Never carries the password or its hash"""

    id: str
    name: str
    phone: str
    status: str
    ordersCompleted: int = 0
    created_at: Optional[datetime] = None
