"""SQLAlchemy adapter for credential persistence."""

from __future__ import annotations

import logging
from typing import cast

import sqlalchemy as sa
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from credential_service.application.ports.credential_store_port import (
    CredentialNotFoundError,
    CredentialRecord,
    CredentialStorePort,
    DuplicateUsernameError,
    StoreUnavailableError,
)
from credential_service.infrastructure.db.metadata import credentials, metadata
from credential_service.infrastructure.db.session import create_engine, create_session_factory

logger = logging.getLogger(__name__)


class SqlAlchemyCredentialStore(CredentialStorePort):
    """Credential store backed by SQLAlchemy async sessions.

    Username uniqueness is enforced by the `uq_credentials_username` constraint, so a
    registration is a single INSERT and concurrent duplicates are resolved by the database.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._session_factory = create_session_factory(engine)

    @classmethod
    def from_url(cls, database_url: str) -> SqlAlchemyCredentialStore:
        """Build a store owning a fresh engine for the database URL."""

        return cls(create_engine(database_url))

    async def open(self) -> None:
        """Create the credentials table when it does not exist yet."""

        try:
            async with self._engine.begin() as connection:
                await connection.run_sync(metadata.create_all)
        except (SQLAlchemyError, OSError) as exc:
            raise StoreUnavailableError("failed to initialize credential schema") from exc
        logger.info("credential_store_opened dialect=%s", self._engine.dialect.name)

    async def close(self) -> None:
        """Dispose pooled connections."""

        await self._engine.dispose()
        logger.info("credential_store_closed")

    async def register(self, *, username: str, password_hash: str) -> CredentialRecord:
        """Insert one credential row in its own transaction."""

        statement = sa.insert(credentials).values(
            username=username,
            password_hash=password_hash,
        )
        try:
            async with self._session_factory() as session:
                try:
                    await session.execute(statement)
                    await session.commit()
                except IntegrityError as exc:
                    await session.rollback()
                    raise DuplicateUsernameError(username=username) from exc
        except DuplicateUsernameError:
            raise
        except (SQLAlchemyError, OSError) as exc:
            raise StoreUnavailableError("credential insert failed") from exc

        return CredentialRecord(username=username, password_hash=password_hash)

    async def lookup(self, *, username: str) -> CredentialRecord:
        """Return the stored credential for one username."""

        statement = sa.select(
            credentials.c.username,
            credentials.c.password_hash,
        ).where(credentials.c.username == username).limit(1)

        try:
            async with self._session_factory() as session:
                result = await session.execute(statement)
        except (SQLAlchemyError, OSError) as exc:
            raise StoreUnavailableError("credential lookup failed") from exc

        row = result.mappings().first()
        if row is None:
            raise CredentialNotFoundError(username=username)
        return _to_credential_record(row)


def _to_credential_record(row: sa.RowMapping) -> CredentialRecord:
    return CredentialRecord(
        username=cast(str, row["username"]),
        password_hash=cast(str, row["password_hash"]),
    )
