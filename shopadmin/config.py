import os
import warnings
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./shopadmin.db")

# Security - signing key for admin bearer tokens
SECRET_KEY = os.getenv("SECRET_KEY")
if not SECRET_KEY:
    warnings.warn(
        "SECRET_KEY not set! Using insecure default - DO NOT USE IN PRODUCTION", RuntimeWarning, stacklevel=2
    )
    SECRET_KEY = "INSECURE-DEV-KEY-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only

# Single admin account (phone + password login)
ADMIN_PHONE = os.getenv("ADMIN_PHONE")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")
if not ADMIN_PHONE or not ADMIN_PASSWORD:
    warnings.warn(
        "ADMIN_PHONE/ADMIN_PASSWORD not set! Using demo credentials", RuntimeWarning, stacklevel=2
    )
    ADMIN_PHONE = ADMIN_PHONE or "1234567890"
    ADMIN_PASSWORD = ADMIN_PASSWORD or "admin123"  # noqa: S105 - Dev fallback only

# Admin session lifetime
TOKEN_TTL_SECONDS = int(os.getenv("TOKEN_TTL_SECONDS", "43200"))  # 12 hours

# Shop locale - used to decide "open now" on the public storefront
SHOP_TIMEZONE = os.getenv("SHOP_TIMEZONE", "Asia/Karachi")
CURRENCY = os.getenv("CURRENCY", "PKR")

# Frontend base URL (CORS default)
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")

# Login throttling (Redis backed, fail-open)
RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
LOGIN_MAX_ATTEMPTS = int(os.getenv("LOGIN_MAX_ATTEMPTS", "5"))
LOGIN_WINDOW_SECONDS = int(os.getenv("LOGIN_WINDOW_SECONDS", "300"))

# Deployment environment and HTTP hardening
ENVIRONMENT = os.getenv("ENVIRONMENT", "development").lower()
SECURITY_HEADERS_ENABLED = os.getenv("SECURITY_HEADERS_ENABLED", "true").lower() == "true"

# CORS - the admin panel and the storefront
ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS",
    f"{FRONTEND_URL},http://localhost:3000",
).split(",")
