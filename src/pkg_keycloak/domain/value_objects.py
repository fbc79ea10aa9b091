# src/pkg_keycloak/domain/value_objects.py

from __future__ import annotations

import textwrap
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Tuple

from .constants import DEFAULT_REALM, PEM_FOOTER, PEM_HEADER
from .exceptions import InvalidArgumentError


# --- Realm value objects ---------------------------------------------------


@dataclass(frozen=True, slots=True)
class RealmConfig:
    """
    Where the realm lives: Keycloak base URL + realm name.

    `base_url` is kept exactly as configured; use `normalized_base_url`
    for anything realm-root relative. An empty realm falls back to "master".
    """
    base_url: str
    realm: str = DEFAULT_REALM

    def __init__(self, base_url: str, realm: Optional[str] = None) -> None:
        object.__setattr__(self, "base_url", base_url or "")
        object.__setattr__(self, "realm", realm or DEFAULT_REALM)

    @property
    def normalized_base_url(self) -> str:
        return self.base_url.rstrip("/")


# --- Logout value objects --------------------------------------------------


@dataclass(frozen=True, slots=True)
class LogoutParameter:
    """
    One extra query parameter for the logout URL.

    Accepts either a single-key mapping (``{"ui_locales": "de"}``) or a
    ``(key, value)`` pair; anything else is a caller error.
    """
    key: str
    value: str

    @classmethod
    def parse(cls, raw: Any) -> "LogoutParameter":
        if isinstance(raw, LogoutParameter):
            return raw

        if isinstance(raw, Mapping):
            if len(raw) != 1:
                raise InvalidArgumentError(
                    "Invalid argument. Expected an array with a key and a value."
                )
            ((key, value),) = raw.items()
        elif isinstance(raw, tuple) and len(raw) == 2:
            key, value = raw
        else:
            raise InvalidArgumentError(
                "Invalid argument. Expected an array with a key and a value."
            )

        return cls(key=str(key), value="" if value is None else str(value))


def parse_logout_parameters(params: Iterable[Any] | None) -> Tuple[LogoutParameter, ...]:
    """Validate every extra parameter up front, preserving order."""
    if params is None:
        return ()
    if isinstance(params, (str, bytes, Mapping)):
        # a lone mapping is almost always a forgotten list wrapper
        raise InvalidArgumentError(
            "Logout parameters must be a sequence of single key/value pairs."
        )
    return tuple(LogoutParameter.parse(p) for p in params)


@dataclass(frozen=True, slots=True)
class LogoutRequest:
    redirect_uri: Optional[str] = None
    client_id: Optional[str] = None
    id_token_hint: Optional[str] = None
    extra_params: Tuple[LogoutParameter, ...] = ()

    def __init__(
            self,
            redirect_uri: Optional[str] = None,
            client_id: Optional[str] = None,
            id_token_hint: Optional[str] = None,
            extra_params: Iterable[Any] | None = None,
    ) -> None:
        object.__setattr__(self, "redirect_uri", redirect_uri)
        object.__setattr__(self, "client_id", client_id)
        object.__setattr__(self, "id_token_hint", id_token_hint)
        object.__setattr__(self, "extra_params", parse_logout_parameters(extra_params))


# --- Signing keys ----------------------------------------------------------


def to_pem(key_material: str) -> str:
    """
    Wrap a bare base64 public key (as served by the admin keys endpoint)
    in PEM armor. Already armored input is returned unchanged.
    """
    stripped = key_material.strip()
    if stripped.startswith("-----BEGIN"):
        return stripped

    body = "".join(stripped.split())
    lines = textwrap.wrap(body, 64)
    return "\n".join([PEM_HEADER, *lines, PEM_FOOTER])


@dataclass(frozen=True, slots=True)
class SigningKeyRef:
    """Algorithm + PEM public key used to verify realm-issued tokens."""
    algorithm: str
    public_key_pem: str

    @classmethod
    def from_raw(cls, algorithm: str, key_material: str) -> "SigningKeyRef":
        return cls(algorithm=algorithm, public_key_pem=to_pem(key_material))
