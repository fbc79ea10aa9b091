from enum import Enum


PROVIDER_IDENTIFIER = "KEYCLOAK"

DEFAULT_REALM = "master"
DEFAULT_SCOPES = ("openid",)
SCOPE_SEPARATOR = " "

PEM_HEADER = "-----BEGIN PUBLIC KEY-----"
PEM_FOOTER = "-----END PUBLIC KEY-----"


class Endpoint(Enum):
    AUTH = "auth"
    TOKEN = "token"
    USERINFO = "userinfo"
    LOGOUT = "logout"


class LogoutConvention(Enum):
    """Which query-parameter convention a logout URL was built with."""
    BARE = "bare"
    LEGACY = "legacy"  # Keycloak < 18: redirect_uri
    RP_INITIATED = "rp_initiated"  # Keycloak >= 18: post_logout_redirect_uri
