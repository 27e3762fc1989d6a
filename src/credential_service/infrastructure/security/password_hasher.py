"""Bcrypt password hasher adapter."""

from __future__ import annotations

import logging
import secrets

import bcrypt

from credential_service.application.ports.password_hasher_port import (
    HashingError,
    PasswordHasherPort,
)

# Cost 11 keeps one hash around 100-200ms on commodity hardware.
BCRYPT_COST_FACTOR = 11
BCRYPT_MIN_COST = 4
BCRYPT_MAX_COST = 31
BCRYPT_MAX_PASSWORD_BYTES = 72
BCRYPT_PREFIX = "2b"

logger = logging.getLogger(__name__)


class BcryptPasswordHasher(PasswordHasherPort):
    """Password hashing adapter using bcrypt."""

    def __init__(self, *, rounds: int = BCRYPT_COST_FACTOR) -> None:
        if not BCRYPT_MIN_COST <= rounds <= BCRYPT_MAX_COST:
            raise ValueError(
                f"bcrypt rounds must be between {BCRYPT_MIN_COST} and {BCRYPT_MAX_COST}"
            )
        self._rounds = rounds
        self._dummy_hash: bytes | None = None

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash_password(self, password: str) -> str:
        encoded = password.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
            raise HashingError(
                f"password exceeds {BCRYPT_MAX_PASSWORD_BYTES} bytes accepted by bcrypt"
            )
        try:
            salt = bcrypt.gensalt(rounds=self._rounds, prefix=BCRYPT_PREFIX.encode("ascii"))
            return bcrypt.hashpw(encoded, salt).decode("utf-8")
        except (OSError, ValueError) as exc:
            raise HashingError("bcrypt hashing failed") from exc

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            logger.warning("password_verify_rejected_hash reason=malformed_or_oversized")
            return False

    def dummy_verify(self, password: str) -> None:
        """Run one bcrypt check against a throwaway hash at the configured cost."""

        if self._dummy_hash is None:
            self._dummy_hash = bcrypt.hashpw(
                secrets.token_bytes(16),
                bcrypt.gensalt(rounds=self._rounds),
            )
        try:
            bcrypt.checkpw(password.encode("utf-8"), self._dummy_hash)
        except ValueError:
            return

    def needs_rehash(self, password_hash: str) -> bool:
        """Return whether a stored hash uses another algorithm tag or cost than this hasher."""

        parts = password_hash.split("$")
        if len(parts) != 4 or parts[0] != "" or parts[1] != BCRYPT_PREFIX:
            return True
        try:
            cost = int(parts[2])
        except ValueError:
            return True
        return cost != self._rounds
