from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple
from urllib.parse import quote_plus

from ...domain.constants import LogoutConvention
from ...domain.exceptions import InvalidArgumentError
from ...domain.value_objects import LogoutRequest


def _enc(value: str) -> str:
    return quote_plus(value, safe="")


def logout_convention(request: LogoutRequest) -> LogoutConvention:
    if request.redirect_uri is None:
        return LogoutConvention.BARE
    if request.client_id is None and request.id_token_hint is None:
        return LogoutConvention.LEGACY
    return LogoutConvention.RP_INITIATED


@dataclass(slots=True)
class BuildLogoutUrlUseCase:
    """
    Build the realm logout URL for both Keycloak parameter conventions.

    - no redirect:                   bare URL (RP-initiated logout, no redirect)
    - redirect only:                 ?redirect_uri=...  (before Keycloak 18)
    - redirect + client/id_token:    ?post_logout_redirect_uri=...  (Keycloak 18+)

    https://www.keycloak.org/docs/18.0/securing_apps/index.html#logout
    https://openid.net/specs/openid-connect-rpinitiated-1_0.html
    """

    logout_url: str

    def execute(self, request: LogoutRequest) -> str:
        convention = logout_convention(request)

        if convention is LogoutConvention.BARE:
            return self.logout_url

        if convention is LogoutConvention.LEGACY:
            return f"{self.logout_url}?redirect_uri={_enc(request.redirect_uri)}"

        url = f"{self.logout_url}?post_logout_redirect_uri={_enc(request.redirect_uri)}"

        # Either client_id or id_token_hint is required for the redirect to work.
        if request.client_id is not None:
            url += f"&client_id={_enc(request.client_id)}"
        if request.id_token_hint is not None:
            url += f"&id_token_hint={_enc(request.id_token_hint)}"

        for param in request.extra_params:
            url += f"&{param.key}={_enc(param.value)}"

        return url

    def build(
            self,
            redirect_uri: Optional[str] = None,
            client_id: Optional[str] = None,
            id_token_hint: Optional[str] = None,
            extra_params: Iterable[Any] | None = None,
    ) -> str:
        """
        Raises:
            InvalidArgumentError if any extra parameter is not a single
            key/value pair (checked before anything else).
        """
        return self.execute(
            LogoutRequest(
                redirect_uri=redirect_uri,
                client_id=client_id,
                id_token_hint=id_token_hint,
                extra_params=extra_params,
            )
        )


@dataclass(slots=True)
class BuildStaticLogoutUrlUseCase:
    """
    Single-convention logout URL with the redirect taken from configuration.

    The id_token_hint is appended verbatim (not percent-encoded).
    """

    logout_url: str
    post_logout_redirect_uri: str

    def execute(self, id_token_hint: str) -> str:
        return (
            f"{self.logout_url}?id_token_hint={id_token_hint}"
            f"&post_logout_redirect_uri={_enc(self.post_logout_redirect_uri)}"
        )


def split_key_value_params(raw: Iterable[str]) -> Tuple[Tuple[str, str], ...]:
    """Turn ``["k=v", ...]`` (CLI / query style) into logout parameter pairs."""
    pairs = []
    for item in raw:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise InvalidArgumentError(f"Expected key=value, got {item!r}")
        pairs.append((key, value))
    return tuple(pairs)
