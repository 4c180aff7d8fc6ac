"""
SQLAlchemy declarative base and common mixins.

Provides base class for all ORM models and reusable mixins
for common fields (timestamps, UUIDs).

Dependencies: sqlalchemy
System role: Foundation for all database models
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    """Current UTC time, used for all timestamp defaults."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base for ORM model registration.

    All database models inherit from this class to ensure they're
    registered with the metadata and included in table creation.
    """

    pass


class UUIDMixin:
    """
    Mixin providing UUID primary key to all models.

    Uses the backend-agnostic Uuid type: native UUID on PostgreSQL,
    CHAR(32) on SQLite.

    Attributes:
        id: UUID v4 primary key, auto-generated on insert
    """

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        nullable=False,
    )


class CreatedAtMixin:
    """
    Mixin providing an immutable creation timestamp.

    Attributes:
        created_at: Row creation timestamp (UTC, immutable)
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )


class TimestampMixin(CreatedAtMixin):
    """
    Mixin providing automatic timestamp tracking to mutable models.

    Attributes:
        created_at: Row creation timestamp (UTC, immutable)
        updated_at: Last modification timestamp (UTC, auto-updated)
    """

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )
