from __future__ import annotations

from typing import Optional

from ...domain.constants import Endpoint
from ...domain.entities import RealmEndpoints
from ...domain.value_objects import RealmConfig


def realm_root(config: RealmConfig) -> str:
    # e.g. "https://auth.example.com/realms/MyRealm"
    return f"{config.normalized_base_url}/realms/{config.realm}".rstrip("/")


def endpoint_url(root: str, endpoint: Endpoint) -> str:
    return f"{root}/protocol/openid-connect/{endpoint.value}"


def resolve_endpoints(base_url: str, realm: Optional[str] = None) -> RealmEndpoints:
    """
    Derive every endpoint of a realm from the base URL.

    Pure string formatting, never fails. The admin keys URL is the only one
    built from the base URL exactly as configured.
    """
    config = RealmConfig(base_url, realm)
    root = realm_root(config)

    return RealmEndpoints(
        realm_url=root,
        auth_url=endpoint_url(root, Endpoint.AUTH),
        token_url=endpoint_url(root, Endpoint.TOKEN),
        userinfo_url=endpoint_url(root, Endpoint.USERINFO),
        logout_url=endpoint_url(root, Endpoint.LOGOUT),
        keys_url=f"{config.base_url}/admin/realms/{config.realm}/keys",
    )
