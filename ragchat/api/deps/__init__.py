"""API-specific dependencies."""

from .dependencies import (
    ServiceCache,
    get_current_user_id,
    get_document_service,
    get_message_service,
    get_required_user_id,
    get_service_cache,
    get_session_service,
)

__all__ = [
    "ServiceCache",
    "get_current_user_id",
    "get_document_service",
    "get_message_service",
    "get_required_user_id",
    "get_service_cache",
    "get_session_service",
]
