from __future__ import annotations

from fastapi import Depends, Request

from app.errors import AuthenticationError, ForbiddenError
from app.security.auth import AUTHENTICATION_REQUIRED, authenticate
from app.security.config import SecurityConfig
from app.token_util import TokenClaims, TokenService


def get_security_config(request: Request) -> SecurityConfig:
    config = getattr(request.app.state, "security_config", None)
    if config is None:
        raise RuntimeError("Security config not loaded. Did app startup run?")
    return config


def get_token_service(request: Request) -> TokenService:
    tokens = getattr(request.app.state, "token_service", None)
    if tokens is None:
        raise RuntimeError("Token service not configured. Did app startup run?")
    return tokens


def get_current_claims(request: Request) -> TokenClaims:
    claims = getattr(request.state, "claims", None)
    if claims is None:
        raise AuthenticationError(AUTHENTICATION_REQUIRED)
    return claims


def _route_template(request: Request) -> str:
    """The template of the matched route: "/employees/{id}", not "/employees/7"."""

    route = request.scope.get("route")
    if route is None:
        endpoint = request.scope.get("endpoint")
        method = request.method.upper()
        route = next(
            (
                r
                for r in request.app.routes
                if getattr(r, "endpoint", None) is endpoint and method in (getattr(r, "methods", None) or ())
            ),
            None,
        )
    return getattr(route, "path_format", None) or request.url.path


def enforce_security(
    request: Request,
    config: SecurityConfig = Depends(get_security_config),
    tokens: TokenService = Depends(get_token_service),
) -> None:
    """
    Global security dependency, driven by `config/security_config.yaml`.

    Runs after routing and before the body is validated, so an unauthenticated
    write is rejected with 401 whatever its payload looks like.
    """

    guard = config.guard_for(request.method, _route_template(request))
    if guard is None:
        return

    claims = authenticate(request, config, tokens)
    request.state.claims = claims

    if not claims.has_any_role(guard.required_roles):
        raise ForbiddenError(f"Insufficient role. Required one of: {sorted(guard.required_roles)}")
