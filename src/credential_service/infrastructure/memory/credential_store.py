"""In-process credential store for disposable runs and tests."""

from __future__ import annotations

import asyncio

from credential_service.application.ports.credential_store_port import (
    CredentialNotFoundError,
    CredentialRecord,
    CredentialStorePort,
    DuplicateUsernameError,
    StoreUnavailableError,
)


class InMemoryCredentialStore(CredentialStorePort):
    """Dict-backed credential store.

    A dict has no uniqueness constraint of its own, so check-and-insert runs under one
    lock to keep concurrent registrations of the same username exclusive.
    """

    def __init__(self) -> None:
        self._records: dict[str, str] = {}
        self._lock = asyncio.Lock()
        self._is_open = False

    async def open(self) -> None:
        self._is_open = True

    async def close(self) -> None:
        self._is_open = False

    async def register(self, *, username: str, password_hash: str) -> CredentialRecord:
        self._require_open()
        async with self._lock:
            if username in self._records:
                raise DuplicateUsernameError(username=username)
            self._records[username] = password_hash
        return CredentialRecord(username=username, password_hash=password_hash)

    async def lookup(self, *, username: str) -> CredentialRecord:
        self._require_open()
        password_hash = self._records.get(username)
        if password_hash is None:
            raise CredentialNotFoundError(username=username)
        return CredentialRecord(username=username, password_hash=password_hash)

    def _require_open(self) -> None:
        if not self._is_open:
            raise StoreUnavailableError("credential store is not open")
