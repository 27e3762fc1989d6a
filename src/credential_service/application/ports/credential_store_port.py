"""Port for credential persistence."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class CredentialRecord:
    """Persisted username and password hash pair."""

    username: str
    password_hash: str


class CredentialStoreError(Exception):
    """Base class for credential store failures."""


class DuplicateUsernameError(CredentialStoreError):
    """Raised when a credential already exists for the username."""

    def __init__(self, *, username: str) -> None:
        super().__init__(f"username already registered: {username}")
        self.username = username


class CredentialNotFoundError(CredentialStoreError):
    """Raised when no credential exists for the username."""

    def __init__(self, *, username: str) -> None:
        super().__init__(f"credential not found: {username}")
        self.username = username


class StoreUnavailableError(CredentialStoreError):
    """Raised when the underlying storage cannot be reached or fails mid-operation."""


class CredentialStorePort(Protocol):
    """Credential store contract."""

    async def open(self) -> None:
        """Prepare storage for use, creating the schema when absent."""

    async def close(self) -> None:
        """Release storage resources."""

    async def register(self, *, username: str, password_hash: str) -> CredentialRecord:
        """Insert one credential atomically or raise `DuplicateUsernameError`."""

    async def lookup(self, *, username: str) -> CredentialRecord:
        """Return the credential for username or raise `CredentialNotFoundError`."""
