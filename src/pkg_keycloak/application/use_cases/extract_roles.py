from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from ...domain.exceptions import (
    InvalidTokenError,
    KeycloakRequestError,
    SigningKeyNotFoundError,
)
from ...domain.ports import RealmGateway, TokenDecoder
from ...domain.value_objects import SigningKeyRef

logger = logging.getLogger(__name__)

ClientRoles = Dict[str, List[str]]


def _roles_of(grant: Any) -> List[str]:
    if not isinstance(grant, Mapping):
        return []
    return list(grant.get("roles") or [])


@dataclass(slots=True)
class ExtractClientRolesUseCase:
    """
    Application use case:
    - Resolve the realm signing key (configured, or fetched from the admin
      keys endpoint with the caller's own access token)
    - Verify the access token via TokenDecoder port
    - Map `resource_access` -> {client_id: [roles]}

    Never raises. Any failure yields `{}`, so callers cannot tell "no roles"
    from "could not verify"; the cause is logged instead.
    """

    realm_client: RealmGateway
    token_decoder: TokenDecoder
    public_key: Optional[str] = None
    algorithm: Optional[str] = None

    def get_key(self, algorithm: str, access_token: str) -> Optional[str]:
        """Raw public key of the realm's active `algorithm` key, or None."""
        try:
            return self.realm_client.get_public_key(algorithm, access_token)
        except SigningKeyNotFoundError as exc:
            logger.warning("Realm signing key unavailable: %s", exc)
        except KeycloakRequestError as exc:
            logger.warning("Could not fetch realm keys: %s", exc)
        except Exception:
            logger.exception("Unexpected error while fetching realm keys")
        return None

    def _signing_key(self, access_token: str) -> Optional[SigningKeyRef]:
        if self.public_key:
            return SigningKeyRef.from_raw(self.algorithm or "", self.public_key)

        raw = self.get_key(self.algorithm or "", access_token)
        if not raw:
            return None
        return SigningKeyRef.from_raw(self.algorithm or "", raw)

    def execute(self, access_token: str, client_id: Optional[str] = None) -> ClientRoles:
        if not self.public_key and not self.algorithm:
            logger.debug("No public key or algorithm configured, skipping role extraction")
            return {}

        try:
            key = self._signing_key(access_token)
            if key is None:
                return {}

            claims = self.token_decoder.decode(access_token, key.public_key_pem, key.algorithm)
            return self._roles_from_claims(claims, client_id)
        except InvalidTokenError as exc:
            logger.info("Access token rejected during role extraction: %s", exc)
        except Exception:
            logger.exception("Role extraction failed")
        return {}

    # ------------------------------------------------------------------ #
    # Internal: claims -> roles mapping (Keycloak-specific)
    # ------------------------------------------------------------------ #

    @staticmethod
    def _roles_from_claims(claims: Mapping[str, Any], client_id: Optional[str]) -> ClientRoles:
        resource_access = claims.get("resource_access")
        if not isinstance(resource_access, Mapping):
            logger.info("Token carries no resource_access claim")
            return {}

        if client_id:
            if client_id not in resource_access:
                return {}
            return {client_id: _roles_of(resource_access[client_id])}

        return {cid: _roles_of(grant) for cid, grant in resource_access.items()}
