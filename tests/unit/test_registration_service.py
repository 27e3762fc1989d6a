from __future__ import annotations

import pytest

from credential_service.application.ports.credential_store_port import (
    CredentialRecord,
    DuplicateUsernameError,
    StoreUnavailableError,
)
from credential_service.application.ports.password_hasher_port import HashingError
from credential_service.application.services.registration_service import (
    RegistrationOutcome,
    RegistrationService,
)


class FakeCredentialStore:
    def __init__(self, *, error: Exception | None = None) -> None:
        self.error = error
        self.records: dict[str, str] = {}
        self.register_calls: list[tuple[str, str]] = []

    async def open(self) -> None:
        return None

    async def close(self) -> None:
        return None

    async def register(self, *, username: str, password_hash: str) -> CredentialRecord:
        self.register_calls.append((username, password_hash))
        if self.error is not None:
            raise self.error
        if username in self.records:
            raise DuplicateUsernameError(username=username)
        self.records[username] = password_hash
        return CredentialRecord(username=username, password_hash=password_hash)

    async def lookup(self, *, username: str) -> CredentialRecord:
        raise AssertionError("registration must not read before insert")


class FakePasswordHasher:
    def __init__(self, *, error: Exception | None = None) -> None:
        self.error = error
        self.hash_calls: list[str] = []

    def hash_password(self, password: str) -> str:
        self.hash_calls.append(password)
        if self.error is not None:
            raise self.error
        return f"hashed::{password}"

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        return password_hash == f"hashed::{password}"

    def dummy_verify(self, password: str) -> None:
        _ = password

    def needs_rehash(self, password_hash: str) -> bool:
        _ = password_hash
        return False


@pytest.mark.asyncio
async def test_register_hashes_then_inserts_and_returns_created() -> None:
    store = FakeCredentialStore()
    hasher = FakePasswordHasher()
    service = RegistrationService(credentials=store, password_hasher=hasher)

    result = await service.register(username="alice", password="pw1")

    assert result.outcome is RegistrationOutcome.CREATED
    assert result.username == "alice"
    assert hasher.hash_calls == ["pw1"]
    assert store.register_calls == [("alice", "hashed::pw1")]
    assert store.records == {"alice": "hashed::pw1"}


@pytest.mark.asyncio
async def test_duplicate_username_returns_username_taken_and_keeps_first_hash() -> None:
    store = FakeCredentialStore()
    hasher = FakePasswordHasher()
    service = RegistrationService(credentials=store, password_hasher=hasher)

    first = await service.register(username="alice", password="pw1")
    second = await service.register(username="alice", password="pw2")

    assert first.outcome is RegistrationOutcome.CREATED
    assert second.outcome is RegistrationOutcome.USERNAME_TAKEN
    assert second.username == "alice"
    assert store.records == {"alice": "hashed::pw1"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("username", "password", "detail"),
    [
        ("", "pw", "username cannot be blank"),
        ("   ", "pw", "username cannot be blank"),
        (None, "pw", "username cannot be blank"),
        ("alice", "", "password cannot be blank"),
        ("alice", None, "password cannot be blank"),
    ],
)
async def test_blank_input_is_rejected_without_hashing_or_store_mutation(
    username: str | None,
    password: str | None,
    detail: str,
) -> None:
    store = FakeCredentialStore()
    hasher = FakePasswordHasher()
    service = RegistrationService(credentials=store, password_hasher=hasher)

    result = await service.register(username=username, password=password)

    assert result.outcome is RegistrationOutcome.INVALID_INPUT
    assert result.detail == detail
    assert hasher.hash_calls == []
    assert store.register_calls == []


@pytest.mark.asyncio
async def test_hashing_error_returns_internal_error_without_store_call() -> None:
    store = FakeCredentialStore()
    hasher = FakePasswordHasher(error=HashingError("too long"))
    service = RegistrationService(credentials=store, password_hasher=hasher)

    result = await service.register(username="alice", password="pw")

    assert result.outcome is RegistrationOutcome.INTERNAL_ERROR
    assert result.detail is None
    assert store.register_calls == []


@pytest.mark.asyncio
async def test_store_unavailable_returns_internal_error() -> None:
    store = FakeCredentialStore(error=StoreUnavailableError("disk gone"))
    hasher = FakePasswordHasher()
    service = RegistrationService(credentials=store, password_hasher=hasher)

    result = await service.register(username="alice", password="pw")

    assert result.outcome is RegistrationOutcome.INTERNAL_ERROR
    assert result.detail is None
