from __future__ import annotations

import logging

from fastapi import Request

from app.errors import AuthenticationError
from app.security.config import SecurityConfig
from app.token_util import InvalidTokenError, TokenClaims, TokenService

logger = logging.getLogger(__name__)

AUTHENTICATION_REQUIRED = "Authentication required"
INVALID_TOKEN = "Invalid or expired token"


def extract_bearer_token(request: Request, config: SecurityConfig) -> str:
    """
    Read `Authorization: Bearer <token>` from the request.

    Missing header, wrong scheme and empty token all fail the same way (401).
    """

    header_name = config.auth.authorization_header
    bearer_prefix = config.auth.bearer_prefix

    raw = request.headers.get(header_name)
    if not raw:
        logger.info("Missing %s header path=%s method=%s", header_name, request.url.path, request.method)
        raise AuthenticationError(AUTHENTICATION_REQUIRED)

    prefix = f"{bearer_prefix} "
    if not raw.lower().startswith(prefix.lower()):
        logger.warning("Invalid %s header format path=%s method=%s", header_name, request.url.path, request.method)
        raise AuthenticationError(AUTHENTICATION_REQUIRED)

    token = raw[len(prefix) :].strip()
    if not token:
        logger.warning("Empty bearer token path=%s method=%s", request.url.path, request.method)
        raise AuthenticationError(AUTHENTICATION_REQUIRED)

    return token


def authenticate(request: Request, config: SecurityConfig, tokens: TokenService) -> TokenClaims:
    token = extract_bearer_token(request, config)
    try:
        return tokens.validate(token)
    except InvalidTokenError as exc:
        logger.info("Rejected bearer token path=%s method=%s", request.url.path, request.method)
        raise AuthenticationError(INVALID_TOKEN) from exc
