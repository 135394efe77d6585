import asyncio

import pytest
from fastapi import HTTPException
from starlette.requests import Request

from shopadmin import rate_limiter


class FakePipeline:
    def __init__(self, store):
        self.store = store
        self.ops = []

    def get(self, key):
        self.ops.append(lambda: self.store.get(key))

    def ttl(self, key):
        self.ops.append(lambda: 120 if key in self.store else -2)

    def incr(self, key):
        def op():
            self.store[key] = int(self.store.get(key, 0)) + 1
            return self.store[key]

        self.ops.append(op)

    def expire(self, key, seconds):
        self.ops.append(lambda: True)

    def execute(self):
        return [op() for op in self.ops]


class FakeRedis:
    def __init__(self):
        self.store = {}

    def pipeline(self):
        return FakePipeline(self.store)

    def delete(self, key):
        self.store.pop(key, None)


def make_request(ip="10.0.0.1"):
    return Request({"type": "http", "method": "POST", "path": "/auth/login", "headers": [], "client": (ip, 1234)})


@pytest.fixture
def enabled(monkeypatch):
    monkeypatch.setattr(rate_limiter, "RATE_LIMIT_ENABLED", True)


def test_blocks_after_limit(monkeypatch, enabled):
    fake = FakeRedis()
    monkeypatch.setattr(rate_limiter, "get_redis_client", lambda: fake)
    limiter = rate_limiter.create_rate_limiter(limit=2, window_seconds=300, key_prefix="login")
    request = make_request()

    for _ in range(2):
        asyncio.run(limiter(request))
        rate_limiter.register_failure(request, "login", 300)

    with pytest.raises(HTTPException) as exc_info:
        asyncio.run(limiter(request))
    assert exc_info.value.status_code == 429
    assert exc_info.value.headers["Retry-After"] == "120"

    # other clients are unaffected
    asyncio.run(limiter(make_request("10.0.0.2")))

    rate_limiter.reset_attempts(request, "login")
    asyncio.run(limiter(request))


def test_fails_open_without_redis(monkeypatch, enabled):
    def unavailable():
        raise ConnectionError("redis down")

    monkeypatch.setattr(rate_limiter, "get_redis_client", unavailable)
    limiter = rate_limiter.create_rate_limiter(limit=1, window_seconds=60, key_prefix="login")
    request = make_request()

    rate_limiter.register_failure(request, "login", 60)
    assert asyncio.run(limiter(request)) is None


def test_forwarded_for_header_wins():
    request = Request(
        {
            "type": "http",
            "headers": [(b"x-forwarded-for", b"203.0.113.9, 10.0.0.1")],
            "client": ("10.0.0.1", 1234),
        }
    )
    assert rate_limiter.client_ip(request) == "203.0.113.9"
