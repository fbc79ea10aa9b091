from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ...domain.entities import ProviderUser
from ...domain.ports import RealmGateway


def map_user(user: Mapping[str, Any]) -> ProviderUser:
    """userinfo payload -> ProviderUser (OIDC standard claims only)."""
    return ProviderUser(
        id=user.get("sub"),
        nickname=user.get("preferred_username"),
        name=user.get("name"),
        email=user.get("email"),
        raw=dict(user),
    )


@dataclass(slots=True)
class FetchUserUseCase:
    """
    Application use case:
    - Call the realm userinfo endpoint with the user's access token
    - Map the payload to a ProviderUser

    Errors are NOT swallowed here: the host framework decides what a failed
    userinfo call means.
    """

    realm_client: RealmGateway

    def get_user_by_token(self, token: str) -> dict[str, Any]:
        """
        Raises:
            KeycloakRequestError
        """
        return self.realm_client.get_userinfo(token)

    def execute(self, token: str) -> ProviderUser:
        return map_user(self.get_user_by_token(token))
