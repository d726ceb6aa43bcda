"""Claims extracted from a validated session token."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TokenClaims:
    """
    Small, serializable view of a validated token for the rest of the app.
    """

    subject: str
    """Username the token was issued to (`sub`)."""

    roles: tuple[str, ...]
    """Roles from the `role` claim; one entry today, a set conceptually."""

    jti: str
    """Unique id of this issuance."""

    issuer: str
    audience: str
    expires_at: datetime

    def has_any_role(self, required: Iterable[str]) -> bool:
        """True when no role is required or at least one required role is held."""
        required = set(required)
        return not required or bool(required & set(self.roles))

    def to_claim_list(self) -> list[dict[str, str]]:
        """Flatten into `{"type", "value"}` pairs, one per role."""
        claims = [{"type": "sub", "value": self.subject}]
        claims.extend({"type": "role", "value": role} for role in self.roles)
        claims.extend(
            [
                {"type": "jti", "value": self.jti},
                {"type": "iss", "value": self.issuer},
                {"type": "aud", "value": self.audience},
                {"type": "exp", "value": str(int(self.expires_at.timestamp()))},
            ]
        )
        return claims
