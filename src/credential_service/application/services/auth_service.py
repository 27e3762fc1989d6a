"""Application authentication service for credential verification."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import StrEnum

from credential_service.application.ports.credential_store_port import (
    CredentialNotFoundError,
    CredentialStorePort,
    StoreUnavailableError,
)
from credential_service.application.ports.password_hasher_port import PasswordHasherPort
from credential_service.domain.credentials import (
    CredentialValidationError,
    require_password,
    require_username,
)

logger = logging.getLogger(__name__)


class AuthOutcome(StrEnum):
    """Supported authentication outcomes.

    Unknown usernames and wrong passwords both resolve to `AUTHENTICATION_FAILED`.
    """

    AUTHENTICATED = "authenticated"
    INVALID_INPUT = "invalid_input"
    AUTHENTICATION_FAILED = "authentication_failed"
    INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True)
class AuthResult:
    """Authentication result model."""

    outcome: AuthOutcome
    username: str | None = None
    detail: str | None = None


class AuthService:
    """Authenticate a username/password pair against stored credentials."""

    def __init__(
        self,
        *,
        credentials: CredentialStorePort,
        password_hasher: PasswordHasherPort,
    ) -> None:
        self._credentials = credentials
        self._password_hasher = password_hasher

    async def authenticate(self, *, username: str | None, password: str | None) -> AuthResult:
        """Verify one credential pair without revealing which check failed."""

        try:
            checked_username = require_username(username=username)
            plaintext = require_password(password=password)
        except CredentialValidationError as exc:
            return AuthResult(outcome=AuthOutcome.INVALID_INPUT, detail=str(exc))

        try:
            record = await self._credentials.lookup(username=checked_username)
        except CredentialNotFoundError:
            await asyncio.to_thread(self._password_hasher.dummy_verify, plaintext)
            logger.info(
                "login_failed username=%s reason=unknown_user",
                checked_username,
            )
            return AuthResult(outcome=AuthOutcome.AUTHENTICATION_FAILED)
        except StoreUnavailableError:
            logger.exception("login_store_failed username=%s", checked_username)
            return AuthResult(outcome=AuthOutcome.INTERNAL_ERROR)

        is_valid = await asyncio.to_thread(
            self._password_hasher.verify_password,
            password=plaintext,
            password_hash=record.password_hash,
        )
        if not is_valid:
            logger.info(
                "login_failed username=%s reason=password_mismatch",
                checked_username,
            )
            return AuthResult(outcome=AuthOutcome.AUTHENTICATION_FAILED)

        if self._password_hasher.needs_rehash(record.password_hash):
            logger.info("login_hash_outdated username=%s", checked_username)
        logger.info("login_success username=%s", checked_username)
        return AuthResult(outcome=AuthOutcome.AUTHENTICATED, username=checked_username)
