"""Credential verification for the login endpoint."""

from __future__ import annotations

import hmac
from typing import Protocol


class CredentialVerifier(Protocol):
    def verify(self, username: str, password: str) -> bool: ...


class StaticCredentialVerifier:
    """
    A single configured username/password pair.

    Both fields are always compared (constant-time) so the response does not
    reveal which one was wrong. With no password configured, nothing verifies.
    """

    def __init__(self, username: str, password: str | None) -> None:
        self._username = username
        self._password = password

    @property
    def configured(self) -> bool:
        return bool(self._username and self._password)

    def verify(self, username: str, password: str) -> bool:
        if not self.configured:
            return False
        username_ok = hmac.compare_digest(username.encode("utf-8"), self._username.encode("utf-8"))
        password_ok = hmac.compare_digest(password.encode("utf-8"), self._password.encode("utf-8"))
        return username_ok and password_ok
