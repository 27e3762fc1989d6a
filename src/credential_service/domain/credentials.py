"""Presence checks for credential inputs."""

from __future__ import annotations


class CredentialValidationError(ValueError):
    """Raised when a username or password is missing or blank."""

    def __init__(self, *, field: str) -> None:
        super().__init__(f"{field} cannot be blank")
        self.field = field


def require_username(*, username: str | None) -> str:
    """Return the username unchanged, rejecting missing or whitespace-only values."""

    if username is None or not username.strip():
        raise CredentialValidationError(field="username")
    return username


def require_password(*, password: str | None) -> str:
    """Return the plaintext password unchanged, rejecting missing or whitespace-only values."""

    if password is None or not password.strip():
        raise CredentialValidationError(field="password")
    return password
