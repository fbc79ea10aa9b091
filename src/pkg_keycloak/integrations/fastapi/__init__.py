from __future__ import annotations

from typing import Any, Mapping, Optional

from .deps import FastAPIKeycloak
from ..common.provider_factory import create_keycloak_provider
from ...settings import ProviderSettings


def create_fastapi_keycloak(
    config: ProviderSettings | Mapping[str, Any],
    *,
    client_id: Optional[str] = None,
    cookie_name: str = "access_token",
) -> FastAPIKeycloak:
    """
    High-level helper for FastAPI apps:

    - Creates a KeycloakProvider from config
    - Wraps it in FastAPIKeycloak, exposing:

        kc.get_client_roles
        kc.require_client_roles(...)
        kc.logout_redirect
    """
    provider = create_keycloak_provider(config)
    return FastAPIKeycloak(provider=provider, client_id=client_id, cookie_name=cookie_name)


__all__ = ["FastAPIKeycloak", "create_fastapi_keycloak"]
