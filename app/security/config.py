"""
Which routes need a bearer token, and which roles they need.

`config/security_config.yaml` lists protected routes as "METHOD /path/{param}",
written exactly like the route templates the routers declare. The global
security dependency looks up the template FastAPI matched for the request, so
no path parsing happens here. Routes that are not listed are public.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

_HTTP_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"})


class AuthConfig(BaseModel):
    authorization_header: str = "Authorization"
    bearer_prefix: str = "Bearer"


class ProtectedRoute(BaseModel):
    route: str
    roles: list[str] = Field(default_factory=list)

    @field_validator("route")
    @classmethod
    def _method_and_template(cls, value: str) -> str:
        method, _, template = value.strip().partition(" ")
        template = template.strip()
        if method.upper() not in _HTTP_METHODS or not template.startswith("/"):
            raise ValueError(f"Expected 'METHOD /path', got {value!r}")
        return f"{method.upper()} {template}"

    def key(self) -> tuple[str, str]:
        method, template = self.route.split(" ", 1)
        return method, template


class SecurityConfigModel(BaseModel):
    auth: AuthConfig = Field(default_factory=AuthConfig)
    protected: list[ProtectedRoute] = Field(default_factory=list)


@dataclass(frozen=True)
class RouteGuard:
    """Requirements for one protected (method, route template) pair."""

    required_roles: frozenset[str]


class SecurityConfig:
    def __init__(self, model: SecurityConfigModel):
        self.model = model
        self._guards: dict[tuple[str, str], RouteGuard] = {}
        for entry in model.protected:
            if entry.key() in self._guards:
                raise ValueError(f"Route listed twice in security config: {entry.route}")
            self._guards[entry.key()] = RouteGuard(required_roles=frozenset(entry.roles))

    @property
    def auth(self) -> AuthConfig:
        return self.model.auth

    @property
    def protected_routes(self) -> frozenset[tuple[str, str]]:
        return frozenset(self._guards)

    def guard_for(self, method: str, route_template: str) -> RouteGuard | None:
        """The guard for a matched route, or None when the route is public."""
        return self._guards.get((method.upper(), route_template))


def load_security_config(path: Path) -> SecurityConfig:
    raw: dict[str, Any] = yaml.safe_load(path.read_text(encoding="utf-8")) or {}

    if "security" not in raw:
        raise ValueError(f"Missing top-level 'security' key in config: {path}")

    return SecurityConfig(SecurityConfigModel.model_validate(raw["security"]))
