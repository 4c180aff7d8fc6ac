"""
Common response models and utilities.

Generic page wrapper and error schema.

Dependencies: pydantic
System role: Common API response structures
"""

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ErrorResponse(BaseModel):
    """Error response schema."""

    success: bool = False
    error: str = Field(description="Error message")
    details: dict | None = Field(default=None, description="Additional error context")


class PageResponse(BaseModel, Generic[T]):
    """Zero-based page of results."""

    content: list[T]
    page: int
    size: int
    total_elements: int
    total_pages: int
    has_next: bool
    has_previous: bool

    @classmethod
    def build(cls, content: list[T], page: int, size: int, total_elements: int) -> "PageResponse[T]":
        """Compute paging fields from a page slice and the overall count."""
        total_pages = math.ceil(total_elements / size) if size > 0 else 0
        return cls(
            content=content,
            page=page,
            size=size,
            total_elements=total_elements,
            total_pages=total_pages,
            has_next=page + 1 < total_pages,
            has_previous=page > 0,
        )
