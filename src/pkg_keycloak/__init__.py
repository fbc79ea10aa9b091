"""
pkg_keycloak

Keycloak provider for OAuth2 / OpenID Connect sign-in: realm endpoint
resolution, logout URLs for old and new Keycloak versions, userinfo
mapping and client-role extraction from access tokens.
"""

__version__ = "0.1.0"

from .domain.constants import Endpoint, LogoutConvention, PROVIDER_IDENTIFIER
from .domain.entities import ProviderUser, RealmEndpoints
from .domain.exceptions import (
    KeycloakProviderError,
    InvalidArgumentError,
    KeycloakRequestError,
    SigningKeyNotFoundError,
    InvalidTokenError,
)
from .domain.value_objects import (
    RealmConfig,
    LogoutParameter,
    LogoutRequest,
    SigningKeyRef,
)
from .domain.ports import (
    EndpointResolver,
    UserMapper,
    TokenFieldsAugmenter,
    TokenDecoder,
    HttpClient,
)

from .application.use_cases.resolve_endpoints import resolve_endpoints
from .application.use_cases.build_logout_url import (
    BuildLogoutUrlUseCase,
    BuildStaticLogoutUrlUseCase,
)
from .application.use_cases.extract_roles import ExtractClientRolesUseCase
from .application.use_cases.fetch_user import FetchUserUseCase

from .adapters.keycloak.jwt_decoder import PEMTokenDecoder
from .adapters.keycloak.realm_client import KeycloakRealmClient

from .settings import ProviderSettings
from .env import settings_from_env
from .integrations.common.provider_factory import (
    KeycloakProvider,
    StaticLogoutKeycloakProvider,
    create_keycloak_provider,
)

__all__ = [
    "__version__",
    # domain core
    "Endpoint",
    "LogoutConvention",
    "PROVIDER_IDENTIFIER",
    "ProviderUser",
    "RealmEndpoints",
    "RealmConfig",
    "LogoutParameter",
    "LogoutRequest",
    "SigningKeyRef",
    "EndpointResolver",
    "UserMapper",
    "TokenFieldsAugmenter",
    "TokenDecoder",
    "HttpClient",
    # exceptions
    "KeycloakProviderError",
    "InvalidArgumentError",
    "KeycloakRequestError",
    "SigningKeyNotFoundError",
    "InvalidTokenError",
    # use cases
    "resolve_endpoints",
    "BuildLogoutUrlUseCase",
    "BuildStaticLogoutUrlUseCase",
    "ExtractClientRolesUseCase",
    "FetchUserUseCase",
    # adapters
    "PEMTokenDecoder",
    "KeycloakRealmClient",
    # config + facade
    "ProviderSettings",
    "settings_from_env",
    "KeycloakProvider",
    "StaticLogoutKeycloakProvider",
    "create_keycloak_provider",
]
