from __future__ import annotations

import os

from .domain.constants import DEFAULT_REALM
from .domain.exceptions import InvalidArgumentError
from .settings import ProviderSettings, as_bool


def settings_from_env() -> ProviderSettings:
    def _bool(key: str, default: bool = True) -> bool:
        return as_bool(os.getenv(key), default)

    def _opt(key: str) -> str | None:
        raw = os.getenv(key)
        return raw.strip() if raw and raw.strip() else None

    base_url = _opt("KEYCLOAK_BASE_URL")
    if not base_url:
        raise InvalidArgumentError("Missing Keycloak settings: KEYCLOAK_BASE_URL")

    timeout_raw = _opt("KEYCLOAK_TIMEOUT")
    try:
        timeout = float(timeout_raw) if timeout_raw else 10.0
    except ValueError as exc:
        raise InvalidArgumentError(f"KEYCLOAK_TIMEOUT is not a number: {timeout_raw!r}") from exc

    return ProviderSettings(
        base_url=base_url,
        realm=_opt("KEYCLOAK_REALM") or DEFAULT_REALM,
        client_id=_opt("KEYCLOAK_CLIENT_ID"),
        client_secret=_opt("KEYCLOAK_CLIENT_SECRET"),
        redirect_uri=_opt("KEYCLOAK_REDIRECT_URI"),
        public_key=_opt("KEYCLOAK_PUBLIC_KEY"),
        algorithm=_opt("KEYCLOAK_ALGORITHM"),
        post_logout_redirect_uri=_opt("KEYCLOAK_POST_LOGOUT_REDIRECT_URI"),
        verify_ssl=_bool("VERIFY_SSL", True),
        timeout=timeout,
    )
