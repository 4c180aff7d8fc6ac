"""
Session API endpoints.

Routes:
- POST /sessions - Create session for the calling user
- GET /sessions - List the calling user's sessions
- GET /sessions/{id} - Get session
- PATCH /sessions/{id} - Rename session
- POST /sessions/{id}/favorite - Toggle favorite flag
- DELETE /sessions/{id} - Delete session with messages and documents

Dependencies: ragchat.application.services.session_service, ragchat.models
System role: Session management HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from ragchat.api.deps import get_required_user_id, get_session_service
from ragchat.application.services.session_service import SessionService
from ragchat.models.session import CreateSessionRequest, RenameSessionRequest, SessionResponse

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(
    request: CreateSessionRequest,
    user_id: UUID = Depends(get_required_user_id),
    session_service: SessionService = Depends(get_session_service),
) -> SessionResponse:
    """
    Create a new session owned by the caller.

    Raises:
        400: Missing X-User-Id or blank session name
    """
    return await session_service.create_session(user_id, request.session_name)


@router.get("", response_model=list[SessionResponse])
async def list_sessions(
    user_id: UUID = Depends(get_required_user_id),
    session_service: SessionService = Depends(get_session_service),
) -> list[SessionResponse]:
    """List the caller's sessions, newest first."""
    return await session_service.list_sessions(user_id)


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(
    session_id: UUID,
    user_id: UUID = Depends(get_required_user_id),
    session_service: SessionService = Depends(get_session_service),
) -> SessionResponse:
    return await session_service.get_session(session_id, user_id=user_id)


@router.patch("/{session_id}", response_model=SessionResponse)
async def rename_session(
    session_id: UUID,
    request: RenameSessionRequest,
    user_id: UUID = Depends(get_required_user_id),
    session_service: SessionService = Depends(get_session_service),
) -> SessionResponse:
    return await session_service.rename_session(
        session_id,
        request.session_name,
        user_id=user_id,
    )


@router.post("/{session_id}/favorite", response_model=SessionResponse)
async def toggle_favorite(
    session_id: UUID,
    user_id: UUID = Depends(get_required_user_id),
    session_service: SessionService = Depends(get_session_service),
) -> SessionResponse:
    return await session_service.toggle_favorite(session_id, user_id=user_id)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    session_id: UUID,
    user_id: UUID = Depends(get_required_user_id),
    session_service: SessionService = Depends(get_session_service),
) -> Response:
    """Delete a session with its messages and documents."""
    await session_service.delete_session(session_id, user_id=user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
