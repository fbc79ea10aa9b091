from typing import Any, Mapping

import jwt
from jwt.exceptions import (
    DecodeError,
    ExpiredSignatureError,
    InvalidSignatureError,
    InvalidTokenError as JWTInvalidTokenError,
    PyJWTError,
)

from ...domain.exceptions import InvalidTokenError
from ...domain.ports import TokenDecoder


class PEMTokenDecoder(TokenDecoder):
    """
    Adapter implementing TokenDecoder port using PyJWT and a PEM public key.

    Infrastructure layer:
    - Knows about JWT structure and verification.
    - Does NOT know where the key came from (config or admin keys endpoint).
    """

    def __init__(self, verify_exp: bool = True, leeway: float = 0) -> None:
        self._verify_exp = verify_exp
        self._leeway = leeway

    # ------------------------------------------------------------------ #
    # Port implementation
    # ------------------------------------------------------------------ #

    def decode(self, token: str, public_key_pem: str, algorithm: str) -> Mapping[str, Any]:
        """
        Decode and verify a JWT signed with `algorithm`.

        Returns:
            Mapping of token claims (dict-like).

        Raises:
            InvalidTokenError
        """
        if not algorithm:
            raise InvalidTokenError("No signing algorithm configured")

        try:
            # Keycloak puts "account" or a list of clients in aud; not checked here
            return jwt.decode(
                token,
                public_key_pem,
                algorithms=[algorithm],
                options={"verify_aud": False, "verify_exp": self._verify_exp},
                leeway=self._leeway,
            )
        except ExpiredSignatureError as exc:
            raise InvalidTokenError("Token has expired") from exc
        except (InvalidSignatureError, DecodeError, JWTInvalidTokenError, PyJWTError) as exc:
            raise InvalidTokenError(f"Invalid token: {exc}") from exc
        except (ValueError, TypeError) as exc:
            # unparsable key material surfaces from cryptography as ValueError
            raise InvalidTokenError(f"Unusable public key: {exc}") from exc
