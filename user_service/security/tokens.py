"""Utilities for issuing and validating access tokens."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any

import jwt

from ..config import Settings
from ..domain.errors import MalformedToken, TokenExpired, TokenInvalid

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
REQUIRED_CLAIMS = ["sub", "iat", "exp"]


@dataclass(frozen=True, slots=True)
class IssuedToken:
    """Encoded bearer token together with its lifetime in seconds."""

    token: str
    expires_in: int


class TokenIssuer:
    """Issue and verify signed, time-bounded access tokens.

    The signing key is fixed at construction time; tokens are stateless and
    cannot be revoked before they expire.
    """

    def __init__(self, secret: str, issuer: str, ttl_seconds: int) -> None:
        """Store the signing key, issuer claim and token lifetime."""
        self._secret = secret
        self._issuer = issuer
        self._ttl_seconds = ttl_seconds

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        return cls(settings.jwt_secret, settings.jwt_issuer, settings.jwt_ttl_seconds)

    def issue(self, subject_email: str) -> IssuedToken:
        """Create a signed JWT whose ``sub`` claim is ``subject_email``.

        Parameters
        ----------
        subject_email:
            Email identifier of the authenticated account.

        Returns
        -------
        IssuedToken
            The encoded JWT string and its TTL (in seconds).
        """
        now = int(time.time())
        payload: dict[str, Any] = {
            "iss": self._issuer,
            "sub": subject_email,
            "iat": now,
            "exp": now + self._ttl_seconds,
        }
        token = jwt.encode(payload, self._secret, algorithm=ALGORITHM)
        return IssuedToken(token=token, expires_in=self._ttl_seconds)

    def verify(self, token: str) -> str:
        """Verify ``token`` and return the subject email it was issued for.

        Raises
        ------
        TokenExpired
            The signature is valid but the ``exp`` claim is in the past.
        TokenInvalid
            Bad signature, foreign issuer or missing claims.
        MalformedToken
            The input is not a decodable JWT.
        """
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                issuer=self._issuer,
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpired() from exc
        except jwt.InvalidSignatureError as exc:
            raise TokenInvalid() from exc
        except jwt.DecodeError as exc:
            raise MalformedToken() from exc
        except jwt.PyJWTError as exc:
            logger.debug("access token rejected: %s", exc)
            raise TokenInvalid() from exc

        subject = claims.get("sub")
        if not isinstance(subject, str) or not subject:
            raise TokenInvalid()
        return subject


def parse_bearer(authorization: str | None) -> str:
    """Extract the token from an ``Authorization: Bearer <token>`` header value."""
    if not authorization:
        raise MalformedToken()
    scheme, _, credentials = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not credentials.strip():
        raise MalformedToken()
    return credentials.strip()
