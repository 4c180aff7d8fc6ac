"""
Document domain models and schemas.

Dependencies: pydantic
System role: Document API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator


class DocumentResponse(BaseModel):
    """Response schema for document operations."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    session_id: uuid.UUID
    original_filename: str
    content_type: str
    size_bytes: int
    indexing_status: str
    error_message: str | None = None
    created_at: datetime
    updated_at: datetime

    @field_validator("indexing_status", mode="before")
    @classmethod
    def _status_value(cls, value):
        return getattr(value, "value", value)
