"""Port for password hashing and verification."""

from __future__ import annotations

from typing import Protocol


class HashingError(RuntimeError):
    """Raised when a plaintext password cannot be turned into a storable hash."""


class PasswordHasherPort(Protocol):
    """Password hashing/verification contract."""

    def hash_password(self, password: str) -> str:
        """Hash plaintext password for storage or raise `HashingError`."""

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        """Verify plaintext password against stored hash; malformed hashes verify as False."""

    def dummy_verify(self, password: str) -> None:
        """Spend one verification worth of work without a stored hash."""

    def needs_rehash(self, password_hash: str) -> bool:
        """Return whether a stored hash was produced with other algorithm settings."""
