"""
Redis-backed attempt limiting for the admin login.

Counts failed attempts per client IP; the window restarts on every failure. When Redis cannot be
reached every request is allowed (fail-open) so a cache outage never locks the
admin out of the back-office.
"""

import logging
import os
from typing import Optional

import redis
from fastapi import HTTPException, Request

from .config import RATE_LIMIT_ENABLED

logger = logging.getLogger(__name__)

# Redis connection
redis_client: Optional[redis.Redis] = None


def get_redis_client() -> redis.Redis:
    """
    Get or create Redis client
    Supports a REDIS_URL or individual host/port settings
    """
    global redis_client

    if redis_client is None:
        logger.info("🔄 Initializing Redis connection for rate limiting...")

        redis_url = os.getenv("REDIS_URL")
        try:
            if redis_url:
                client = redis.from_url(
                    redis_url,
                    decode_responses=True,
                    socket_connect_timeout=2,
                    socket_timeout=2,
                )
            else:
                client = redis.Redis(
                    host=os.getenv("REDIS_HOST", "localhost"),
                    port=int(os.getenv("REDIS_PORT", "6379")),
                    password=os.getenv("REDIS_PASSWORD", None),
                    db=int(os.getenv("REDIS_DB", "0")),
                    ssl=os.getenv("REDIS_SSL", "false").lower() == "true",
                    decode_responses=True,
                    socket_connect_timeout=2,
                    socket_timeout=2,
                )
            client.ping()
        except Exception as e:
            logger.error(f"❌ Failed to connect to Redis: {str(e)}")
            logger.error("⚠️ Login attempts will NOT be limited (fail-open mode)")
            raise
        redis_client = client
        logger.info("Redis connected successfully")

    return redis_client


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def check_rate_limit(key: str, limit: int, client: redis.Redis) -> tuple[bool, int, int]:
    """
    Check whether another attempt is allowed for ``key``.

    Returns:
        (is_allowed, attempts_so_far, seconds_until_reset)
    """
    pipe = client.pipeline()
    pipe.get(key)
    pipe.ttl(key)
    raw_count, ttl = pipe.execute()
    count = int(raw_count or 0)
    return count < limit, count, max(0, ttl or 0)


def register_failure(request: Request, key_prefix: str, window_seconds: int) -> None:
    """Count one failed attempt for the calling IP"""
    if not RATE_LIMIT_ENABLED:
        return
    key = f"{key_prefix}:{client_ip(request)}"
    try:
        client = get_redis_client()
        pipe = client.pipeline()
        pipe.incr(key)
        pipe.expire(key, window_seconds)
        pipe.execute()
    except Exception as e:
        logger.warning(f"⚠️ Could not record failed attempt for {key}: {e}")


def reset_attempts(request: Request, key_prefix: str) -> None:
    if not RATE_LIMIT_ENABLED:
        return
    key = f"{key_prefix}:{client_ip(request)}"
    try:
        get_redis_client().delete(key)
    except Exception as e:
        logger.warning(f"⚠️ Could not reset attempts for {key}: {e}")


def create_rate_limiter(limit: int, window_seconds: int, key_prefix: str = "rate_limit"):
    """
    Create a dependency that rejects callers who already used up their attempts.

    Example usage:
        login_limiter = create_rate_limiter(limit=5, window_seconds=300, key_prefix="login")

        @router.post("/login")
        async def login(data: LoginRequest, _: None = Depends(login_limiter)):
            ...
    """

    async def rate_limiter(request: Request):
        if not RATE_LIMIT_ENABLED:
            return

        key = f"{key_prefix}:{client_ip(request)}"
        try:
            is_allowed, count, ttl = check_rate_limit(key, limit, get_redis_client())
        except Exception as e:
            logger.warning(f"⚠️ Rate limiting unavailable, allowing request: {e}")
            return

        if not is_allowed:
            retry_after = ttl or window_seconds
            logger.warning(f"🚫 Rate limit EXCEEDED for {key} - {count}/{limit} attempts used")
            raise HTTPException(
                status_code=429,
                detail={
                    "message": f"Too many attempts. Try again in {retry_after} seconds.",
                    "retry_after": retry_after,
                    "limit": limit,
                    "window_seconds": window_seconds,
                },
                headers={"Retry-After": str(retry_after)},
            )

    return rate_limiter
