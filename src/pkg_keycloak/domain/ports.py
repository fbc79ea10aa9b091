from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .entities import ProviderUser


class HttpResponse(Protocol):
    status_code: int

    def json(self) -> Any:
        ...

    def raise_for_status(self) -> Any:
        ...


class HttpClient(Protocol):
    """
    Port for the injected HTTP transport.

    Both `requests.Session` and `httpx.Client` satisfy it.
    """

    def get(self, url: str, *, headers: Mapping[str, str], timeout: Any = ...) -> HttpResponse:
        ...


class EndpointResolver(Protocol):
    """What a generic OAuth2 client needs to know about where to send the user."""

    def get_base_url(self) -> str:
        ...

    def get_auth_url(
        self,
        state: str,
        *,
        client_id: str,
        redirect_uri: str,
        scopes: Optional[Sequence[str]] = None,
        **extra: str,
    ) -> str:
        ...

    def get_token_url(self) -> str:
        ...


class UserMapper(Protocol):
    def get_user_by_token(self, token: str) -> Mapping[str, Any]:
        ...

    def map_user_to_object(self, user: Mapping[str, Any]) -> ProviderUser:
        ...


class TokenFieldsAugmenter(Protocol):
    def get_token_fields(
        self,
        code: str,
        base_fields: Optional[Mapping[str, Any]] = None,
    ) -> dict[str, Any]:
        ...


class TokenDecoder(Protocol):
    """
    Port for verifying an access token against a known public key.

    Implementations live in the adapters layer (e.g. PyJWT decoder).
    """

    def decode(self, token: str, public_key_pem: str, algorithm: str) -> Mapping[str, Any]:
        """
        Verify signature and return the claims.

        Raises:
          - InvalidTokenError
        """
        ...


class RealmGateway(Protocol):
    """
    Port for the realm calls made on behalf of a user token.

    Implementations raise KeycloakRequestError on transport problems and
    SigningKeyNotFoundError when the realm has no usable key.
    """

    def get_userinfo(self, token: str) -> dict[str, Any]:
        ...

    def get_public_key(self, algorithm: str, token: str) -> str:
        ...
