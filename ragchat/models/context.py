"""
Message context payload.

A message's optional context is a tagged variant keyed on ``source``:
- RetrievalContext ("session-documents"): chunks used to answer the turn
- ClientMetadata ("client"): free-form metadata supplied by the caller
A message without context stores NULL.

Dependencies: pydantic
System role: Type-safe schema for the persisted message context column
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter


class ContextDocument(BaseModel):
    """Reference to one retrieved chunk used as generation context."""

    session_id: str | None = None
    document_id: str | None = None
    filename: str | None = None
    chunk_index: int | None = None
    snippet: str | None = Field(default=None, description="Chunk text, at most 500 characters")
    score: float | None = None


class RetrievalContext(BaseModel):
    """Context attached to AI messages generated with retrieved chunks."""

    source: Literal["session-documents"] = "session-documents"
    documents: list[ContextDocument] = Field(default_factory=list)


class ClientMetadata(BaseModel):
    """Arbitrary metadata supplied by the client with a message."""

    source: Literal["client"] = "client"
    extra: dict[str, Any] = Field(default_factory=dict)


MessageContext = Annotated[
    Union[RetrievalContext, ClientMetadata],
    Field(discriminator="source"),
]

_context_adapter: TypeAdapter[MessageContext] = TypeAdapter(MessageContext)


def parse_message_context(raw: dict | None) -> RetrievalContext | ClientMetadata | None:
    """
    Parse the stored JSON column into its variant.

    Args:
        raw: Column value (None for messages without context)

    Returns:
        Parsed context variant, or None
    """
    if raw is None:
        return None
    return _context_adapter.validate_python(raw)


def dump_message_context(
    context: RetrievalContext | ClientMetadata | None,
) -> dict | None:
    """Serialize a context variant for the JSON column."""
    if context is None:
        return None
    return context.model_dump(mode="json")
