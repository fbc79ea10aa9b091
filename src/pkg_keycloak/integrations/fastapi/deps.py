from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse
from fastapi.security import HTTPAuthorizationCredentials

from ...domain.exceptions import InvalidArgumentError
from ..common.provider_factory import KeycloakProvider
from .security import (
    DEFAULT_COOKIE_NAME,
    DEFAULT_ID_TOKEN_COOKIE_NAME,
    bearer_scheme,
    require_token,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FastAPIKeycloak:
    """
    FastAPI integration for pkg_keycloak.

    Exposes:
      - get_client_roles:            {client_id: [roles]} of the caller's token
      - require_client_roles(...):   403 unless the caller holds any of the roles
      - logout_redirect:             302 to the realm logout endpoint
    """

    provider: KeycloakProvider
    client_id: Optional[str] = None  # restrict roles to this client
    cookie_name: str = DEFAULT_COOKIE_NAME
    id_token_cookie_name: str = DEFAULT_ID_TOKEN_COOKIE_NAME

    # ------------------------------------------------------------------ #
    # Base dependencies
    # ------------------------------------------------------------------ #

    async def get_client_roles(
            self,
            request: Request,
            credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    ) -> Dict[str, List[str]]:
        """Dependency: token required; unverifiable tokens simply have no roles."""
        token = require_token(request, credentials, self.cookie_name)
        return self.provider.get_user_roles(token, self.client_id)

    # ------------------------------------------------------------------ #
    # Authorization dependency factories
    # ------------------------------------------------------------------ #

    def require_client_roles(self, *roles: str) -> Callable:
        """
        Dependency factory: require any of the given roles of `client_id`
        (or of any client when no client_id is set).
        """

        async def dependency(
                client_roles: Dict[str, List[str]] = Depends(self.get_client_roles),
        ) -> Dict[str, List[str]]:
            held = {r for granted in client_roles.values() for r in granted}
            if not any(r in held for r in roles):
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail=f"Missing at least one required client role from: {list(roles)}",
                )
            return client_roles

        return dependency

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    async def logout_redirect(
            self,
            request: Request,
            redirect_uri: Optional[str] = None,
    ) -> RedirectResponse:
        """
        Route handler: send the browser to the realm logout endpoint.

        The id token (if any) is read from `id_token_cookie_name`; the
        configured client id is sent along so Keycloak 18+ honours the redirect.
        """
        id_token = request.cookies.get(self.id_token_cookie_name) or None
        client_id = self.provider.settings.client_id if redirect_uri else None
        try:
            url = self.provider.get_logout_url(
                redirect_uri=redirect_uri,
                client_id=client_id,
                id_token_hint=id_token if redirect_uri else None,
            )
        except InvalidArgumentError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

        logger.debug("Redirecting to Keycloak logout: %s", url)
        response = RedirectResponse(url, status_code=status.HTTP_302_FOUND)
        response.delete_cookie(self.cookie_name)
        response.delete_cookie(self.id_token_cookie_name)
        return response
