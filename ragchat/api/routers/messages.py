"""
Message API endpoints.

Routes:
- POST /sessions/{id}/messages - Post a message and generate the reply
- GET /sessions/{id}/messages - Page through messages, newest first

Dependencies: ragchat.application.services.message_service, ragchat.models
System role: Chat message HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from ragchat.api.deps import get_message_service, get_required_user_id
from ragchat.application.services.message_service import MessageService
from ragchat.models.message import CreateMessageRequest, MessagePage, MessageResponse

router = APIRouter(prefix="/sessions", tags=["messages"])


@router.post(
    "/{session_id}/messages",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_message(
    session_id: UUID,
    request: CreateMessageRequest,
    user_id: UUID = Depends(get_required_user_id),
    message_service: MessageService = Depends(get_message_service),
) -> MessageResponse:
    """
    Store a message; the AI reply is persisted before this returns.

    Returns:
        MessageResponse: The stored message

    Raises:
        400: Blank content or unknown sender
        404: Session not found
    """
    message = await message_service.create_message(
        session_id,
        request.sender,
        request.content,
        user_id=user_id,
        metadata=request.metadata,
    )
    return MessageResponse.from_model(message)


@router.get("/{session_id}/messages", response_model=MessagePage)
async def list_messages(
    session_id: UUID,
    page: int = Query(default=0),
    size: int = Query(default=20),
    user_id: UUID = Depends(get_required_user_id),
    message_service: MessageService = Depends(get_message_service),
) -> MessagePage:
    """Page through a session's messages ordered by sequence descending."""
    return await message_service.list_messages_page(
        session_id,
        page,
        size,
        user_id=user_id,
    )
