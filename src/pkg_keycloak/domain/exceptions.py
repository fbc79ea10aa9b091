class KeycloakProviderError(Exception):
    """Base class for errors raised by the provider."""
    pass


class InvalidArgumentError(KeycloakProviderError, ValueError):
    """Raised when a caller passes a malformed argument (e.g. logout parameters)."""
    pass


class KeycloakRequestError(KeycloakProviderError):
    """Raised when a call to the Keycloak realm fails or returns garbage."""
    pass


class SigningKeyNotFoundError(KeycloakProviderError):
    """Raised when the realm has no usable public key for an algorithm."""
    pass


class InvalidTokenError(KeycloakProviderError):
    """Raised when an access token cannot be verified or decoded."""
    pass
