import asyncio
import json

import pytest
from cryptography.fernet import InvalidToken
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from shopadmin import auth
from shopadmin.auth import create_access_token, decode_access_token, get_current_admin


def test_login_returns_token(client):
    response = client.post("/auth/login", json={"phone": "123-456-7890", "password": "admin123"})
    assert response.status_code == 200
    body = response.json()
    assert body["tokenType"] == "bearer"
    assert decode_access_token(body["accessToken"])["sub"] == "1234567890"


@pytest.mark.parametrize(
    "payload",
    [
        {"phone": "1234567890", "password": "wrong"},
        {"phone": "1112223333", "password": "admin123"},
    ],
)
def test_login_rejects_bad_credentials(client, payload):
    response = client.post("/auth/login", json=payload)
    assert response.status_code == 401


def test_me(client, auth_headers):
    response = client.get("/auth/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"phone": "1234567890", "role": "admin"}


def test_garbage_token_rejected(client):
    response = client.get("/schedules", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


async def _resolve(token):
    return await get_current_admin(HTTPAuthorizationCredentials(scheme="Bearer", credentials=token))


def test_expired_token_rejected(monkeypatch):
    token = create_access_token("1234567890")
    monkeypatch.setattr(auth, "TOKEN_TTL_SECONDS", -1)
    with pytest.raises(InvalidToken):
        decode_access_token(token)


def test_token_for_other_subject_rejected():
    token = auth.cipher.encrypt(json.dumps({"sub": "999", "role": "admin"}).encode()).decode()
    with pytest.raises(HTTPException) as exc_info:
        asyncio.run(_resolve(token))
    assert exc_info.value.status_code == 401


def test_security_headers_present(client):
    response = client.get("/")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "SAMEORIGIN"


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
