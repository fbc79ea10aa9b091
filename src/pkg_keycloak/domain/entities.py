from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True, slots=True)
class RealmEndpoints:
    """
    Protocol endpoints of one realm.

    `keys_url` points at the admin API and is built from the configured
    base URL as-is, not from `realm_url`.
    """
    realm_url: str
    auth_url: str
    token_url: str
    userinfo_url: str
    logout_url: str
    keys_url: str

    def as_dict(self) -> Dict[str, str]:
        return {
            "realm_url": self.realm_url,
            "auth_url": self.auth_url,
            "token_url": self.token_url,
            "userinfo_url": self.userinfo_url,
            "logout_url": self.logout_url,
            "keys_url": self.keys_url,
        }


@dataclass(slots=True)
class ProviderUser:
    """
    User as handed back to the host OAuth2 framework.
    Mapped from the userinfo payload; the payload itself is kept in `raw`.
    """
    id: Optional[str] = None
    nickname: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict)
