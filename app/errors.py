"""
Application error taxonomy.

Each error carries the HTTP status the API boundary translates it to. Handlers
live in `app.main`; routers and the store only raise.
"""

from __future__ import annotations

from typing import Any


class ApiError(Exception):
    status_code: int = 500

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationError(ApiError):
    """Bad input shape or constraint violation."""

    status_code = 400


class AuthenticationError(ApiError):
    """Missing, malformed, invalid or expired credentials/token."""

    status_code = 401


class ForbiddenError(ApiError):
    status_code = 403


class NotFoundError(ApiError):
    status_code = 404
