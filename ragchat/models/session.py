"""
Session domain models and schemas.

Request/response schemas for session operations.

Dependencies: pydantic
System role: Session API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CreateSessionRequest(BaseModel):
    """Request schema for creating a new session."""

    session_name: str | None = Field(default=None, description="Display name, required")


class RenameSessionRequest(BaseModel):
    """Request schema for renaming a session."""

    session_name: str | None = Field(default=None, description="New display name")


class SessionResponse(BaseModel):
    """Response schema for session operations."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    session_name: str
    is_favorite: bool
    created_at: datetime
    updated_at: datetime
    message_count: int = 0
