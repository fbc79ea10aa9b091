# tests/test_fastapi.py
import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from pkg_keycloak.integrations.common.provider_factory import create_keycloak_provider
from pkg_keycloak.integrations.fastapi import FastAPIKeycloak, create_fastapi_keycloak

LOGOUT = "https://idp.example/realms/acme/protocol/openid-connect/logout"


@pytest.fixture
def kc(rsa_keys) -> FastAPIKeycloak:
    provider = create_keycloak_provider(
        {
            "base_url": "https://idp.example",
            "realms": "acme",
            "client_id": "web-app",
            "public_key": rsa_keys["public"],
            "algorithm": "RS256",
        }
    )
    return FastAPIKeycloak(provider=provider, client_id="client-x")


@pytest.fixture
def client(kc) -> TestClient:
    app = FastAPI()

    @app.get("/roles")
    async def roles(client_roles=Depends(kc.get_client_roles)):
        return client_roles

    @app.get("/admin")
    async def admin(client_roles=Depends(kc.require_client_roles("admin", "owner"))):
        return {"ok": True}

    @app.get("/owner")
    async def owner(client_roles=Depends(kc.require_client_roles("owner"))):
        return {"ok": True}

    app.get("/logout")(kc.logout_redirect)

    return TestClient(app)


def test_roles_from_bearer_header(client, claims, make_token):
    resp = client.get("/roles", headers={"Authorization": f"Bearer {make_token(claims)}"})
    assert resp.status_code == 200
    assert resp.json() == {"client-x": ["admin"]}


def test_roles_from_cookie(client, claims, make_token):
    client.cookies.set("access_token", make_token(claims))
    resp = client.get("/roles")
    assert resp.status_code == 200
    assert resp.json() == {"client-x": ["admin"]}


def test_no_token_is_401(client):
    assert client.get("/roles").status_code == 401
    assert client.get("/admin").status_code == 401


def test_bad_token_has_no_roles(client):
    resp = client.get("/roles", headers={"Authorization": "Bearer garbage"})
    assert resp.status_code == 200
    assert resp.json() == {}


def test_require_client_roles(client, claims, make_token):
    headers = {"Authorization": f"Bearer {make_token(claims)}"}
    assert client.get("/admin", headers=headers).json() == {"ok": True}

    resp = client.get("/owner", headers=headers)
    assert resp.status_code == 403
    assert "owner" in resp.json()["detail"]


def test_logout_redirect_without_target(client):
    resp = client.get("/logout", follow_redirects=False)
    assert resp.status_code == 302
    assert resp.headers["location"] == LOGOUT


def test_logout_redirect_with_target_and_id_token(client):
    client.cookies.set("id_token", "h.e.y")
    resp = client.get("/logout", params={"redirect_uri": "https://app/cb"}, follow_redirects=False)
    assert resp.status_code == 302
    assert resp.headers["location"] == (
        f"{LOGOUT}?post_logout_redirect_uri=https%3A%2F%2Fapp%2Fcb"
        "&client_id=web-app&id_token_hint=h.e.y"
    )


def test_create_fastapi_keycloak():
    kc = create_fastapi_keycloak({"base_url": "https://idp.example", "realms": "acme"}, client_id="api")
    assert isinstance(kc, FastAPIKeycloak)
    assert kc.client_id == "api"
    assert kc.provider.get_base_url() == "https://idp.example/realms/acme"
