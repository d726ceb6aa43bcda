"""
Issue and validate signed session tokens.

A token is a JWT signed with HS256 using the configured shared key. It is
valid iff:

    1. the **signature** verifies against the configured key,
    2. the **issuer** (``iss``) and **audience** (``aud``) match configuration,
    3. it has not **expired** (``exp``), with no clock-skew leeway.

Tokens are never stored, so there is nothing to revoke: validity is purely a
function of signature and expiry.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from .config import TokenConfig
from .context import TokenClaims
from .credentials import CredentialVerifier

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
ADMIN_ROLE = "admin"

_REQUIRED_CLAIMS = ["exp", "iat", "sub", "jti", "iss", "aud"]


class AuthError(Exception):
    """Authentication failed. Do not log the token or the password."""

    pass


class InvalidCredentialsError(AuthError):
    def __init__(self) -> None:
        super().__init__("Invalid username or password")


class InvalidTokenError(AuthError):
    pass


def _extract_claims(payload: dict[str, Any]) -> TokenClaims:
    """
    Build ``TokenClaims`` from a verified payload.

    ``role`` is written as a single string but a list is accepted too, so
    tokens carrying several roles validate without a format change.
    """

    roles: list[str] = []
    raw_role = payload.get("role")
    if isinstance(raw_role, list):
        roles = [str(r) for r in raw_role]
    elif isinstance(raw_role, str) and raw_role:
        roles = [raw_role]

    audience = payload.get("aud")
    if isinstance(audience, list):
        audience = audience[0] if audience else ""

    return TokenClaims(
        subject=str(payload["sub"]),
        roles=tuple(roles),
        jti=str(payload["jti"]),
        issuer=str(payload["iss"]),
        audience=str(audience),
        expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc),
    )


class TokenService:
    """
    Issues tokens for verified credentials and validates presented tokens.

    Built once at startup with an explicit ``TokenConfig``; read-only afterwards.
    """

    def __init__(self, config: TokenConfig, verifier: CredentialVerifier) -> None:
        self._config = config
        self._verifier = verifier

    @property
    def config(self) -> TokenConfig:
        return self._config

    def issue(self, username: str, password: str) -> str:
        """
        Return a signed token for ``username``.

        Raises InvalidCredentialsError when the credential check fails. The
        error is the same whichever of username/password was wrong.
        """
        if not self._verifier.verify(username, password):
            logger.info("Login rejected")
            raise InvalidCredentialsError()

        now = datetime.now(timezone.utc)
        payload = {
            "sub": username,
            "role": ADMIN_ROLE,
            "jti": uuid.uuid4().hex,
            "iss": self._config.issuer,
            "aud": self._config.audience,
            "iat": now,
            "exp": now + timedelta(minutes=self._config.expiry_minutes),
        }
        token = jwt.encode(payload, self._config.signing_key, algorithm=ALGORITHM)
        logger.info("Token issued sub=%s jti=%s", username, payload["jti"])
        return token

    def validate(self, token: str) -> TokenClaims:
        """
        Verify signature, issuer, audience and expiry, then return the claims.

        Raises InvalidTokenError on any failure.
        """
        try:
            payload = jwt.decode(
                token,
                self._config.signing_key,
                algorithms=[ALGORITHM],
                audience=self._config.audience,
                issuer=self._config.issuer,
                leeway=0,
                options={
                    "verify_signature": True,
                    "verify_exp": True,
                    "verify_iss": True,
                    "verify_aud": True,
                    "require": _REQUIRED_CLAIMS,
                },
            )
        except jwt.ExpiredSignatureError as e:
            logger.info("Token expired")
            raise InvalidTokenError("Token expired") from e
        except jwt.InvalidIssuerError as e:
            logger.info("Token invalid issuer")
            raise InvalidTokenError("Invalid token: issuer") from e
        except jwt.InvalidAudienceError as e:
            logger.info("Token invalid audience")
            raise InvalidTokenError("Invalid token: audience") from e
        except jwt.InvalidTokenError as e:
            logger.info("Token invalid: %s", type(e).__name__)
            raise InvalidTokenError("Invalid token") from e

        return _extract_claims(payload)
