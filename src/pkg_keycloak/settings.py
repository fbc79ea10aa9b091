from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .domain.constants import DEFAULT_REALM
from .domain.exceptions import InvalidArgumentError

# Keys this provider reads on top of the host framework's client_id /
# client_secret / redirect.
ADDITIONAL_CONFIG_KEYS = ("base_url", "realms", "public_key", "algorithm")
STATIC_LOGOUT_CONFIG_KEYS = ADDITIONAL_CONFIG_KEYS + ("post_logout_redirect_uri",)

TRUTHY = {"1", "true", "yes", "on"}


def as_bool(raw: Any, default: bool = True) -> bool:
    if raw is None:
        return default
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in TRUTHY


@dataclass(slots=True)
class ProviderSettings:
    """
    Keycloak provider configuration.

    Host code decides how to construct this (env, config file, framework
    service config, etc.).
    """
    base_url: str
    realm: str = DEFAULT_REALM

    # OAuth2 client registration (used by the host's code exchange)
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    redirect_uri: Optional[str] = None

    # Role extraction: a static key, or an algorithm to look up in the realm
    public_key: Optional[str] = None
    algorithm: Optional[str] = None

    # Static logout variant
    post_logout_redirect_uri: Optional[str] = None

    # Transport
    verify_ssl: bool = True
    timeout: float = 10.0

    def __post_init__(self) -> None:
        if not self.base_url or not str(self.base_url).strip():
            raise InvalidArgumentError("Missing Keycloak setting: base_url")
        self.base_url = str(self.base_url).strip()
        self.realm = (self.realm or "").strip() or DEFAULT_REALM

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "ProviderSettings":
        """
        Build settings from a framework-style service config, e.g.::

            {
                "client_id": "...",
                "client_secret": "...",
                "redirect": "https://app/callback",
                "base_url": "https://auth.example.com",
                "realms": "MyRealm",
            }
        """
        base_url = config.get("base_url")
        if not base_url:
            raise InvalidArgumentError("Missing Keycloak setting: base_url")

        timeout = config.get("timeout")
        return cls(
            base_url=base_url,
            realm=config.get("realms") or DEFAULT_REALM,
            client_id=config.get("client_id"),
            client_secret=config.get("client_secret"),
            redirect_uri=config.get("redirect"),
            public_key=config.get("public_key") or None,
            algorithm=config.get("algorithm") or None,
            post_logout_redirect_uri=config.get("post_logout_redirect_uri"),
            verify_ssl=as_bool(config.get("verify_ssl"), True),
            timeout=float(timeout) if timeout is not None else 10.0,
        )
