"""FastAPI router for signup and login endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request
from pydantic import ValidationError

from credential_service.application.dto.credential_models import (
    CredentialPayload,
    MessageResponse,
)
from credential_service.application.services.auth_service import AuthOutcome, AuthService
from credential_service.application.services.registration_service import (
    RegistrationOutcome,
    RegistrationService,
)

INVALID_INPUT_DETAIL = "invalid input"
USERNAME_TAKEN_DETAIL = "username already exists"
INVALID_CREDENTIALS_DETAIL = "invalid credentials"
INTERNAL_ERROR_DETAIL = "internal error"

logger = logging.getLogger(__name__)


def build_credential_router(
    *,
    registration_service: RegistrationService,
    auth_service: AuthService,
) -> APIRouter:
    """Build router exposing credential registration and verification endpoints."""

    router = APIRouter(tags=["credentials"])

    @router.post("/signup", status_code=201, response_model=MessageResponse)
    async def signup(request: Request) -> MessageResponse:
        payload = await _parse_payload(request)
        result = await registration_service.register(
            username=payload.username,
            password=payload.password,
        )

        if result.outcome is RegistrationOutcome.INVALID_INPUT:
            raise HTTPException(status_code=400, detail=result.detail or INVALID_INPUT_DETAIL)
        if result.outcome is RegistrationOutcome.USERNAME_TAKEN:
            raise HTTPException(status_code=409, detail=USERNAME_TAKEN_DETAIL)
        if result.outcome is RegistrationOutcome.INTERNAL_ERROR:
            raise HTTPException(status_code=500, detail=INTERNAL_ERROR_DETAIL)

        return MessageResponse(message=f"user {result.username} created successfully")

    @router.post("/login", response_model=MessageResponse)
    async def login(request: Request) -> MessageResponse:
        payload = await _parse_payload(request)
        result = await auth_service.authenticate(
            username=payload.username,
            password=payload.password,
        )

        if result.outcome is AuthOutcome.INVALID_INPUT:
            raise HTTPException(status_code=400, detail=result.detail or INVALID_INPUT_DETAIL)
        if result.outcome is AuthOutcome.AUTHENTICATION_FAILED:
            raise HTTPException(status_code=401, detail=INVALID_CREDENTIALS_DETAIL)
        if result.outcome is AuthOutcome.INTERNAL_ERROR:
            raise HTTPException(status_code=500, detail=INTERNAL_ERROR_DETAIL)

        return MessageResponse(message=f"welcome, {result.username}!")

    return router


async def _parse_payload(request: Request) -> CredentialPayload:
    raw_body = await request.body()
    try:
        return CredentialPayload.model_validate_json(raw_body)
    except ValidationError as error:
        logger.info("credential_payload_rejected path=%s", request.url.path)
        raise HTTPException(status_code=400, detail=INVALID_INPUT_DETAIL) from error
