"""
Security Headers Middleware for FastAPI

Adds security headers to all API responses:
- X-Frame-Options, X-Content-Type-Options and Referrer-Policy
- Content-Security-Policy (JSON API, nothing to load)
- Strict-Transport-Security in production
- Permissions-Policy with the storefront's geolocation allowed for self
- Cache-Control: no-store unless a route already set its own
"""

import logging
from typing import Callable, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from .config import ALLOWED_ORIGINS, ENVIRONMENT

logger = logging.getLogger(__name__)

IS_PRODUCTION = ENVIRONMENT == "production"


def get_csp_policy() -> str:
    """
    Content-Security-Policy for a JSON API.

    Only the configured frontends may frame responses.
    """
    frame_ancestors = " ".join(["'self'"] + [o for o in ALLOWED_ORIGINS if o])
    directives = [
        "default-src 'none'",
        f"frame-ancestors {frame_ancestors}",
        "img-src 'self' data: https:",
        "base-uri 'none'",
        "form-action 'self'",
    ]
    return "; ".join(directives)


def get_permissions_policy() -> str:
    features = [
        "accelerometer=()",
        "camera=()",
        "geolocation=(self)",
        "gyroscope=()",
        "microphone=()",
        "payment=()",
        "usb=()",
    ]
    return ", ".join(features)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, exclude_paths: Optional[list[str]] = None):
        super().__init__(app)
        self.exclude_paths = exclude_paths or []

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        path = request.url.path
        if any(path.startswith(excluded) for excluded in self.exclude_paths):
            return response

        for name, value in get_security_headers_dict().items():
            if name == "Cache-Control" and name in response.headers:
                continue
            response.headers[name] = value

        return response


def get_security_headers_dict() -> dict:
    headers = {
        "X-Frame-Options": "SAMEORIGIN",
        "X-Content-Type-Options": "nosniff",
        "Referrer-Policy": "strict-origin-when-cross-origin",
        "Content-Security-Policy": get_csp_policy(),
        "Permissions-Policy": get_permissions_policy(),
        "X-Permitted-Cross-Domain-Policies": "none",
        "Cache-Control": "no-store, no-cache, must-revalidate",
    }

    # HTTPS only in production, max-age = 1 year
    if IS_PRODUCTION:
        headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

    return headers
