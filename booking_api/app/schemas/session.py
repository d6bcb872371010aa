"""Pydantic models for the session endpoints."""

from pydantic import BaseModel


class SessionAck(BaseModel):
    """Body returned when a session cookie is set or cleared."""

    success: bool = True
