"""Application service for credential registration."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import StrEnum

from credential_service.application.ports.credential_store_port import (
    CredentialStorePort,
    DuplicateUsernameError,
    StoreUnavailableError,
)
from credential_service.application.ports.password_hasher_port import (
    HashingError,
    PasswordHasherPort,
)
from credential_service.domain.credentials import (
    CredentialValidationError,
    require_password,
    require_username,
)

logger = logging.getLogger(__name__)


class RegistrationOutcome(StrEnum):
    """Supported registration outcomes."""

    CREATED = "created"
    INVALID_INPUT = "invalid_input"
    USERNAME_TAKEN = "username_taken"
    INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True)
class RegistrationResult:
    """Registration result model."""

    outcome: RegistrationOutcome
    username: str | None = None
    detail: str | None = None


class RegistrationService:
    """Hash a new password and persist it under a unique username."""

    def __init__(
        self,
        *,
        credentials: CredentialStorePort,
        password_hasher: PasswordHasherPort,
    ) -> None:
        self._credentials = credentials
        self._password_hasher = password_hasher

    async def register(self, *, username: str | None, password: str | None) -> RegistrationResult:
        """Register one credential; the hash is computed before the store is touched."""

        try:
            checked_username = require_username(username=username)
            plaintext = require_password(password=password)
        except CredentialValidationError as exc:
            return RegistrationResult(outcome=RegistrationOutcome.INVALID_INPUT, detail=str(exc))

        try:
            password_hash = await asyncio.to_thread(
                self._password_hasher.hash_password,
                plaintext,
            )
        except HashingError:
            logger.exception("registration_hash_failed username=%s", checked_username)
            return RegistrationResult(
                outcome=RegistrationOutcome.INTERNAL_ERROR,
                username=checked_username,
            )

        try:
            await self._credentials.register(
                username=checked_username,
                password_hash=password_hash,
            )
        except DuplicateUsernameError:
            logger.info("registration_rejected_duplicate username=%s", checked_username)
            return RegistrationResult(
                outcome=RegistrationOutcome.USERNAME_TAKEN,
                username=checked_username,
            )
        except StoreUnavailableError:
            logger.exception("registration_store_failed username=%s", checked_username)
            return RegistrationResult(
                outcome=RegistrationOutcome.INTERNAL_ERROR,
                username=checked_username,
            )

        logger.info("registration_created username=%s", checked_username)
        return RegistrationResult(
            outcome=RegistrationOutcome.CREATED,
            username=checked_username,
        )
