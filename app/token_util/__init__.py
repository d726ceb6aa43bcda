"""
Standalone utility to issue and validate signed session tokens.

This package has no dependency on other app packages (app.db, app.security, etc.).
Build a TokenService from a TokenConfig and a CredentialVerifier at startup.
"""

from .config import ConfigurationError, TokenConfig
from .context import TokenClaims
from .credentials import CredentialVerifier, StaticCredentialVerifier
from .service import ADMIN_ROLE, AuthError, InvalidCredentialsError, InvalidTokenError, TokenService

__all__ = [
    "ADMIN_ROLE",
    "AuthError",
    "ConfigurationError",
    "CredentialVerifier",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "StaticCredentialVerifier",
    "TokenClaims",
    "TokenConfig",
    "TokenService",
]
