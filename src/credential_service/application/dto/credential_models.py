"""Pydantic models for credential HTTP payloads."""

from __future__ import annotations

from pydantic import BaseModel


class CredentialPayload(BaseModel):
    """Username/password pair posted to signup and login.

    Blank values are accepted here and rejected by the services with a field-specific message.
    """

    username: str
    password: str


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str
