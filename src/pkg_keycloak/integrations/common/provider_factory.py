from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Sequence
from urllib.parse import urlencode

from ...adapters.keycloak.jwt_decoder import PEMTokenDecoder
from ...adapters.keycloak.realm_client import KeycloakRealmClient
from ...application.use_cases.build_logout_url import (
    BuildLogoutUrlUseCase,
    BuildStaticLogoutUrlUseCase,
)
from ...application.use_cases.extract_roles import ClientRoles, ExtractClientRolesUseCase
from ...application.use_cases.fetch_user import FetchUserUseCase, map_user
from ...application.use_cases.resolve_endpoints import resolve_endpoints
from ...domain.constants import DEFAULT_SCOPES, PROVIDER_IDENTIFIER, SCOPE_SEPARATOR
from ...domain.entities import ProviderUser, RealmEndpoints
from ...domain.exceptions import InvalidArgumentError
from ...domain.ports import (
    EndpointResolver,
    HttpClient,
    RealmGateway,
    TokenDecoder,
    TokenFieldsAugmenter,
    UserMapper,
)
from ...settings import ADDITIONAL_CONFIG_KEYS, STATIC_LOGOUT_CONFIG_KEYS, ProviderSettings


@dataclass(slots=True)
class KeycloakProvider(EndpointResolver, UserMapper, TokenFieldsAugmenter):
    """
    Framework-agnostic Keycloak provider facade.

    A generic OAuth2 client (state handling, code exchange, refresh) depends
    on this through the EndpointResolver / UserMapper / TokenFieldsAugmenter
    ports. Integrations (FastAPI, CLI) adapt it further.
    """

    settings: ProviderSettings
    endpoints: RealmEndpoints
    fetch_user_use_case: FetchUserUseCase
    logout_use_case: BuildLogoutUrlUseCase
    roles_use_case: ExtractClientRolesUseCase

    identifier = PROVIDER_IDENTIFIER

    @staticmethod
    def additional_config_keys() -> list[str]:
        return list(ADDITIONAL_CONFIG_KEYS)

    # --- Endpoints --------------------------------------------------------

    def get_base_url(self) -> str:
        return self.endpoints.realm_url

    def get_auth_url(
        self,
        state: str,
        *,
        client_id: Optional[str] = None,
        redirect_uri: Optional[str] = None,
        scopes: Optional[Sequence[str]] = None,
        **extra: str,
    ) -> str:
        """Authorize endpoint with the standard code-flow query string."""
        query = {
            "client_id": client_id or self.settings.client_id or "",
            "redirect_uri": redirect_uri or self.settings.redirect_uri or "",
            "scope": SCOPE_SEPARATOR.join(scopes or DEFAULT_SCOPES),
            "response_type": "code",
            "state": state,
            **extra,
        }
        return f"{self.endpoints.auth_url}?{urlencode(query)}"

    def get_token_url(self) -> str:
        return self.endpoints.token_url

    def get_token_fields(
        self,
        code: str,
        base_fields: Optional[Mapping[str, Any]] = None,
    ) -> dict[str, Any]:
        """Code-exchange form; host-supplied `base_fields` win over settings."""
        fields = dict(base_fields or {})
        fields.setdefault("code", code)
        for key, value in (
            ("client_id", self.settings.client_id),
            ("client_secret", self.settings.client_secret),
            ("redirect_uri", self.settings.redirect_uri),
        ):
            if value is not None:
                fields.setdefault(key, value)
        fields["grant_type"] = "authorization_code"
        return fields

    # --- User -------------------------------------------------------------

    def get_user_by_token(self, token: str) -> dict[str, Any]:
        return self.fetch_user_use_case.get_user_by_token(token)

    def map_user_to_object(self, user: Mapping[str, Any]) -> ProviderUser:
        return map_user(user)

    def user_from_token(self, token: str) -> ProviderUser:
        return self.fetch_user_use_case.execute(token)

    # --- Logout -----------------------------------------------------------

    def get_logout_url(
        self,
        redirect_uri: Optional[str] = None,
        client_id: Optional[str] = None,
        id_token_hint: Optional[str] = None,
        extra_params: Iterable[Any] | None = None,
    ) -> str:
        """
        Raises:
            InvalidArgumentError for malformed extra parameters.
        """
        return self.logout_use_case.build(
            redirect_uri=redirect_uri,
            client_id=client_id,
            id_token_hint=id_token_hint,
            extra_params=extra_params,
        )

    # --- Roles ------------------------------------------------------------

    def get_key(self, algorithm: str, access_token: str) -> Optional[str]:
        return self.roles_use_case.get_key(algorithm, access_token)

    def get_user_roles(self, access_token: str, client_id: Optional[str] = None) -> ClientRoles:
        return self.roles_use_case.execute(access_token, client_id)


@dataclass(slots=True)
class StaticLogoutKeycloakProvider(KeycloakProvider):
    """
    Variant whose logout redirect comes from `post_logout_redirect_uri`
    configuration; callers only pass the id token.
    """

    static_logout_use_case: Optional[BuildStaticLogoutUrlUseCase] = None

    @staticmethod
    def additional_config_keys() -> list[str]:
        return list(STATIC_LOGOUT_CONFIG_KEYS)

    def get_logout_url(  # type: ignore[override]
        self,
        id_token_hint: str,
    ) -> str:
        if self.static_logout_use_case is None:
            raise InvalidArgumentError("post_logout_redirect_uri is not configured")
        return self.static_logout_use_case.execute(id_token_hint)


def create_keycloak_provider(
        config: ProviderSettings | Mapping[str, Any],
        *,
        http_client: Optional[HttpClient] = None,
        realm_client: Optional[RealmGateway] = None,
        token_decoder: Optional[TokenDecoder] = None,
        static_logout: bool = False,
) -> KeycloakProvider:
    """
    High-level factory: Keycloak config -> KeycloakProvider.

    - resolves the realm endpoints
    - builds a KeycloakRealmClient over `http_client` (requests by default)
    - wires the user, logout and role use cases
    """
    settings = config if isinstance(config, ProviderSettings) else ProviderSettings.from_config(config)
    endpoints = resolve_endpoints(settings.base_url, settings.realm)

    gateway: RealmGateway = realm_client or KeycloakRealmClient(
        endpoints,
        http_client=http_client,
        timeout=settings.timeout,
        verify_ssl=settings.verify_ssl,
    )

    fetch_uc = FetchUserUseCase(realm_client=gateway)
    logout_uc = BuildLogoutUrlUseCase(logout_url=endpoints.logout_url)
    roles_uc = ExtractClientRolesUseCase(
        realm_client=gateway,
        token_decoder=token_decoder or PEMTokenDecoder(),
        public_key=settings.public_key,
        algorithm=settings.algorithm,
    )

    if not static_logout:
        return KeycloakProvider(
            settings=settings,
            endpoints=endpoints,
            fetch_user_use_case=fetch_uc,
            logout_use_case=logout_uc,
            roles_use_case=roles_uc,
        )

    static_uc = None
    if settings.post_logout_redirect_uri:
        static_uc = BuildStaticLogoutUrlUseCase(
            logout_url=endpoints.logout_url,
            post_logout_redirect_uri=settings.post_logout_redirect_uri,
        )
    return StaticLogoutKeycloakProvider(
        settings=settings,
        endpoints=endpoints,
        fetch_user_use_case=fetch_uc,
        logout_use_case=logout_uc,
        roles_use_case=roles_uc,
        static_logout_use_case=static_uc,
    )
