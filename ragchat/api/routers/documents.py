"""
Session document API endpoints.

Routes:
- POST /sessions/{id}/documents - Upload a file (multipart field "file")
- GET /sessions/{id}/documents - List documents, newest first
- DELETE /sessions/{id}/documents/{doc_id} - Delete document and stored file
- POST /sessions/{id}/documents/{doc_id}/reindex - Queue indexing again

Dependencies: ragchat.application.services.document_service, ragchat.models
System role: Document HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, Response, UploadFile, status

from ragchat.api.deps import get_document_service, get_required_user_id
from ragchat.application.services.document_service import DocumentService
from ragchat.models.document import DocumentResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["documents"])


@router.post(
    "/{session_id}/documents",
    response_model=DocumentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_document(
    session_id: UUID,
    file: UploadFile = File(...),
    user_id: UUID = Depends(get_required_user_id),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    """
    Upload a document to a session. Indexing continues in the background.

    Returns:
        DocumentResponse: Document in PROCESSING state

    Raises:
        400: Empty file
        404: Session not found
        500: File could not be stored
    """
    data = await file.read()
    logger.info(
        "Document upload received",
        extra={"session_id": str(session_id), "doc_filename": file.filename, "size": len(data)},
    )
    document = await document_service.upload_document(
        session_id,
        file.filename,
        file.content_type,
        data,
        user_id=user_id,
    )
    return DocumentResponse.model_validate(document)


@router.get("/{session_id}/documents", response_model=list[DocumentResponse])
async def list_documents(
    session_id: UUID,
    user_id: UUID = Depends(get_required_user_id),
    document_service: DocumentService = Depends(get_document_service),
) -> list[DocumentResponse]:
    documents = await document_service.list_documents(session_id, user_id=user_id)
    return [DocumentResponse.model_validate(document) for document in documents]


@router.delete(
    "/{session_id}/documents/{document_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_document(
    session_id: UUID,
    document_id: UUID,
    user_id: UUID = Depends(get_required_user_id),
    document_service: DocumentService = Depends(get_document_service),
) -> Response:
    """Delete a document. Its indexed chunks stay in the vector index."""
    await document_service.delete_document(session_id, document_id, user_id=user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{session_id}/documents/{document_id}/reindex",
    response_model=DocumentResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def reindex_document(
    session_id: UUID,
    document_id: UUID,
    user_id: UUID = Depends(get_required_user_id),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    """Queue a document for indexing again."""
    document = await document_service.reindex_document(
        session_id,
        document_id,
        user_id=user_id,
    )
    return DocumentResponse.model_validate(document)
