"""Admin authentication - phone/password login and bearer token verification"""

import base64
import hashlib
import hmac
import json
import logging
import time

from cryptography.fernet import Fernet, InvalidToken
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, field_validator

from .config import (
    ADMIN_PASSWORD,
    ADMIN_PHONE,
    LOGIN_MAX_ATTEMPTS,
    LOGIN_WINDOW_SECONDS,
    SECRET_KEY,
    TOKEN_TTL_SECONDS,
)
from .rate_limiter import create_rate_limiter, register_failure, reset_attempts
from .shared.validators import validate_phone

logger = logging.getLogger(__name__)

security = HTTPBearer()

LOGIN_KEY_PREFIX = "admin_login"


# Token signing key derived from SECRET_KEY
def get_fernet_key():
    key = hashlib.sha256(SECRET_KEY.encode()).digest()
    return base64.urlsafe_b64encode(key)


cipher = Fernet(get_fernet_key())


def create_access_token(phone: str) -> str:
    """Issue a signed, timestamped admin token"""
    payload = json.dumps({"sub": phone, "role": "admin", "iat": int(time.time())})
    return cipher.encrypt(payload.encode()).decode()


def decode_access_token(token: str) -> dict:
    """Verify signature and age; raises InvalidToken when either fails"""
    raw = cipher.decrypt(token.encode(), ttl=TOKEN_TTL_SECONDS)
    return json.loads(raw)


async def get_current_admin(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> dict:
    """Resolve the admin from the bearer token"""
    if not credentials:
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        payload = decode_access_token(credentials.credentials)
    except (InvalidToken, ValueError) as e:
        logger.warning(f"⚠️ Rejected admin token: {type(e).__name__}")
        raise HTTPException(status_code=401, detail="Invalid or expired token") from e

    if payload.get("role") != "admin" or payload.get("sub") != ADMIN_PHONE:
        raise HTTPException(status_code=401, detail="Invalid token claims")
    return payload


# ============================================================================
# LOGIN
# ============================================================================

router = APIRouter(prefix="/auth", tags=["Authentication"])

login_rate_limiter = create_rate_limiter(
    limit=LOGIN_MAX_ATTEMPTS, window_seconds=LOGIN_WINDOW_SECONDS, key_prefix=LOGIN_KEY_PREFIX
)


class LoginRequest(BaseModel):
    phone: str
    password: str

    @field_validator("phone")
    @classmethod
    def normalize_phone(cls, v):
        return validate_phone(v)


class TokenResponse(BaseModel):
    accessToken: str
    tokenType: str = "bearer"
    expiresIn: int = TOKEN_TTL_SECONDS


def verify_admin_credentials(phone: str, password: str) -> bool:
    phone_ok = hmac.compare_digest(phone.encode(), validate_phone(ADMIN_PHONE).encode())
    password_ok = hmac.compare_digest(password.encode(), ADMIN_PASSWORD.encode())
    return phone_ok and password_ok


@router.post("/login", response_model=TokenResponse)
async def login(
    data: LoginRequest,
    request: Request,
    _: None = Depends(login_rate_limiter),
):
    """Exchange the admin phone and password for a bearer token"""
    if not verify_admin_credentials(data.phone, data.password):
        register_failure(request, LOGIN_KEY_PREFIX, LOGIN_WINDOW_SECONDS)
        logger.warning(f"🚫 Failed admin login for phone ending {data.phone[-4:]}")
        raise HTTPException(status_code=401, detail="Invalid phone number or password")

    reset_attempts(request, LOGIN_KEY_PREFIX)
    logger.info("✅ Admin logged in")
    return TokenResponse(accessToken=create_access_token(ADMIN_PHONE))


@router.get("/me")
async def me(admin: dict = Depends(get_current_admin)):
    return {"phone": admin["sub"], "role": admin["role"]}
