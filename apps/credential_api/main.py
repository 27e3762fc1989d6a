"""credential-api entrypoint and HTTP route wiring."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from credential_service.application.ports.credential_store_port import CredentialStorePort
from credential_service.application.ports.password_hasher_port import PasswordHasherPort
from credential_service.application.services.auth_service import AuthService
from credential_service.application.services.registration_service import RegistrationService
from credential_service.config.settings import Settings, load_settings
from credential_service.infrastructure.db.credential_store import SqlAlchemyCredentialStore
from credential_service.infrastructure.http.credential_router import build_credential_router
from credential_service.infrastructure.logging import configure_logging
from credential_service.infrastructure.security.password_hasher import BcryptPasswordHasher

CREDENTIAL_API_HOST = "0.0.0.0"
CREDENTIAL_API_PORT = 8081
logger = logging.getLogger(__name__)


def build_credential_store(database_url: str) -> CredentialStorePort:
    """Build the SQLAlchemy-backed credential store for one database URL."""

    return SqlAlchemyCredentialStore.from_url(database_url)


def create_app(
    *,
    settings: Settings | None = None,
    credential_store: CredentialStorePort | None = None,
    password_hasher: PasswordHasherPort | None = None,
) -> FastAPI:
    """Create FastAPI app exposing signup and login routes.

    The store is opened when the app starts serving and closed on shutdown.
    """

    if settings is None and (credential_store is None or password_hasher is None):
        settings = load_settings()
    if settings is not None:
        configure_logging(level=settings.log_level)

    if credential_store is None:
        assert settings is not None
        credential_store = build_credential_store(settings.database_url)
    if password_hasher is None:
        assert settings is not None
        password_hasher = BcryptPasswordHasher(rounds=settings.bcrypt_rounds)

    store = credential_store
    registration_service = RegistrationService(
        credentials=store,
        password_hasher=password_hasher,
    )
    auth_service = AuthService(credentials=store, password_hasher=password_hasher)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        await store.open()
        logger.info("credential_api_started")
        try:
            yield
        finally:
            await store.close()
            logger.info("credential_api_stopped")

    app = FastAPI(lifespan=lifespan)
    app.include_router(
        build_credential_router(
            registration_service=registration_service,
            auth_service=auth_service,
        )
    )
    return app


def run_asgi_server(
    *,
    host: str = CREDENTIAL_API_HOST,
    port: int = CREDENTIAL_API_PORT,
) -> None:
    """Run credential-api as a long-lived ASGI process using application factory mode."""

    uvicorn.run(
        "apps.credential_api.main:create_app",
        host=host,
        port=port,
        factory=True,
    )


def main() -> None:
    """Run credential-api runtime process."""

    run_asgi_server()


if __name__ == "__main__":
    main()
