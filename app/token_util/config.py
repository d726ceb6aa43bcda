"""Token signing configuration. No hardcoded secrets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class ConfigurationError(ValueError):
    """Token configuration is unusable. Fatal: raised at startup, never per request."""


@dataclass(frozen=True)
class TokenConfig:
    """
    Everything the token service needs to sign and verify tokens.

    Required:
        signing_key: Shared HMAC secret (HS256).

    Optional:
        issuer / audience: Written to `iss` / `aud` and checked on validation.
        expiry_minutes: Token lifetime from issuance.
    """

    signing_key: str
    issuer: str
    audience: str
    expiry_minutes: int = 60

    def __post_init__(self) -> None:
        if not self.signing_key or not self.signing_key.strip():
            raise ConfigurationError("Token signing key is missing (set APP_JWT_KEY)")
        if self.expiry_minutes < 1:
            raise ConfigurationError("Token expiry must be at least one minute")

    def __repr__(self) -> str:
        # Keep the key out of logs and tracebacks.
        return (
            f"TokenConfig(issuer={self.issuer!r}, audience={self.audience!r}, "
            f"expiry_minutes={self.expiry_minutes!r})"
        )

    @classmethod
    def from_settings(cls, settings: Any) -> TokenConfig:
        """Build from an object exposing the `jwt_*` attributes of `app.settings.Settings`."""
        return cls(
            signing_key=settings.jwt_key or "",
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            expiry_minutes=settings.jwt_expiry_minutes,
        )
