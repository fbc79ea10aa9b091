from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from requests import Session

from ...domain.entities import RealmEndpoints
from ...domain.exceptions import KeycloakRequestError, SigningKeyNotFoundError
from ...domain.ports import HttpClient, RealmGateway

logger = logging.getLogger(__name__)


class KeycloakRealmClient(RealmGateway):
    """
    Thin wrapper around the realm's HTTP endpoints we actually call:

    - userinfo (OIDC)
    - admin keys (needs a token with view-realm / manage-realm rights)

    The HTTP transport is injected; a plain `requests.Session` is used
    when none is given.
    """

    def __init__(
        self,
        endpoints: RealmEndpoints,
        http_client: Optional[HttpClient] = None,
        timeout: float = 10.0,
        verify_ssl: bool = True,
    ) -> None:
        self._endpoints = endpoints
        self._timeout = timeout
        if http_client is None:
            session = Session()
            session.verify = verify_ssl
            http_client = session
        self._http = http_client

    @staticmethod
    def _auth_headers(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}", "Accept": "application/json"}

    def _get_json(self, url: str, token: str) -> Any:
        try:
            resp = self._http.get(url, headers=self._auth_headers(token), timeout=self._timeout)
            resp.raise_for_status()
            return resp.json()
        except Exception as exc:
            raise KeycloakRequestError(f"GET {url} failed: {exc}") from exc

    # ------------------------------------------------------------------ #
    # userinfo
    # ------------------------------------------------------------------ #

    def get_userinfo(self, token: str) -> Dict[str, Any]:
        payload = self._get_json(self._endpoints.userinfo_url, token)
        if not isinstance(payload, dict):
            raise KeycloakRequestError("userinfo endpoint did not return a JSON object")
        return payload

    # ------------------------------------------------------------------ #
    # admin keys
    # ------------------------------------------------------------------ #

    def get_public_key(self, algorithm: str, token: str) -> str:
        """
        Return the raw (unarmored) public key of the realm's active key
        for `algorithm`.

        Raises:
            KeycloakRequestError: transport or JSON failure
            SigningKeyNotFoundError: algorithm not active, no key entry,
                or the entry carries no publicKey
        """
        body = self._get_json(self._endpoints.keys_url, token)
        if not isinstance(body, dict):
            raise KeycloakRequestError("keys endpoint did not return a JSON object")

        active = body.get("active") or {}
        if algorithm not in active:
            raise SigningKeyNotFoundError(f"Algorithm {algorithm} is not active in the realm")

        candidates = [k for k in (body.get("keys") or []) if k.get("algorithm") == algorithm]
        if not candidates:
            raise SigningKeyNotFoundError(f"No key listed for algorithm {algorithm}")

        active_kid = active.get(algorithm)
        key = next((k for k in candidates if k.get("kid") == active_kid), candidates[0])

        public_key = key.get("publicKey")
        if not public_key:
            raise SigningKeyNotFoundError(
                f"Key {key.get('kid')!r} for algorithm {algorithm} has no publicKey"
            )

        logger.debug("Resolved active %s key %s from %s", algorithm, key.get("kid"), self._endpoints.keys_url)
        return public_key
