# tests/conftest.py
import json
import time
from typing import Any, Callable, Dict, List

import httpx
import jwt
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

BASE_URL = "https://idp.example"
REALM = "acme"


def _rsa_pair():
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()
    return private_pem, public_pem


def bare_key(public_pem: str) -> str:
    """PEM -> the single-line base64 body the admin keys endpoint returns."""
    lines = [ln for ln in public_pem.strip().splitlines() if not ln.startswith("-----")]
    return "".join(lines)


@pytest.fixture(scope="session")
def rsa_keys():
    private_pem, public_pem = _rsa_pair()
    return {"private": private_pem, "public": public_pem, "bare": bare_key(public_pem)}


@pytest.fixture(scope="session")
def other_rsa_keys():
    private_pem, public_pem = _rsa_pair()
    return {"private": private_pem, "public": public_pem, "bare": bare_key(public_pem)}


@pytest.fixture
def claims() -> Dict[str, Any]:
    now = int(time.time())
    return {
        "sub": "8c1e0f2a",
        "iss": f"{BASE_URL}/realms/{REALM}",
        "aud": "account",
        "iat": now,
        "exp": now + 300,
        "preferred_username": "jdoe",
        "resource_access": {
            "client-x": {"roles": ["admin"]},
            "account": {"roles": ["manage-account", "view-profile"]},
        },
    }


@pytest.fixture
def make_token(rsa_keys) -> Callable[..., str]:
    def _make(payload: Dict[str, Any], private_pem: str | None = None, kid: str = "kid-rs256") -> str:
        return jwt.encode(
            payload,
            private_pem or rsa_keys["private"],
            algorithm="RS256",
            headers={"kid": kid},
        )

    return _make


@pytest.fixture
def keys_body(rsa_keys) -> Dict[str, Any]:
    return {
        "active": {"RS256": "kid-rs256", "HS256": "kid-hs256"},
        "keys": [
            {"algorithm": "HS256", "kid": "kid-hs256", "type": "OCT"},
            {"algorithm": "RS256", "kid": "kid-rs256", "type": "RSA", "publicKey": rsa_keys["bare"]},
        ],
    }


class RecordingTransport:
    """httpx.MockTransport wrapper remembering every request it served."""

    def __init__(self, routes: Dict[str, Any]) -> None:
        self.routes = routes
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(str(request.url))
        if route is None:
            return httpx.Response(404, json={"error": "not found"})
        if isinstance(route, httpx.Response):
            return route
        if isinstance(route, Exception):
            raise route
        return httpx.Response(200, content=json.dumps(route).encode(), headers={"Content-Type": "application/json"})


@pytest.fixture
def transport_factory():
    def _factory(routes: Dict[str, Any]):
        recorder = RecordingTransport(routes)
        client = httpx.Client(transport=httpx.MockTransport(recorder))
        return client, recorder

    return _factory
