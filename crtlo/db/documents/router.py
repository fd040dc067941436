"""Document router: generates RTLO documents and lists stored ones."""

from fastapi import APIRouter, Depends

from crtlo.ai.gateway.dependencies import get_rtlo_assistant_service
from crtlo.ai.gateway.service import RTLOAssistantService
from crtlo.auth.dependencies import get_data_owner_id
from crtlo.db.decorators import handle_route_errors
from crtlo.db.dependencies import get_document_repository
from crtlo.db.documents.repository import DocumentRepository
from crtlo.db.documents.schemas import DocumentCreate, DocumentResponse

router = APIRouter(prefix="/documents", tags=["Documents"])


@router.post("", response_model=DocumentResponse)
@handle_route_errors("generate document")
async def create_document(
    request: DocumentCreate,
    owner_id: str = Depends(get_data_owner_id),
    repository: DocumentRepository = Depends(get_document_repository),
    assistant: RTLOAssistantService = Depends(get_rtlo_assistant_service),
) -> DocumentResponse:
    """
    Generate a document from the supplied facts and store it.

    The request's `data` is kept on the record as `metadata`.

    Args:
        request: Document type, title, optional property and facts
        owner_id: Owner of the new record
        repository: The document repository instance from dependency injection
        assistant: Gateway-backed RTLO assistant

    Returns:
        DocumentResponse: The stored document including generated content
    """
    data = request.data or {}
    content = await assistant.generate_rtlo_document(request.document_type, data)
    document = await repository.create_document(
        user_id=owner_id,
        document_type=request.document_type,
        title=request.title,
        content=content,
        property_id=request.property_id,
        metadata=data,
    )
    await repository.session.commit()
    return DocumentResponse.model_validate(document)


@router.get("", response_model=list[DocumentResponse])
@handle_route_errors("fetch documents")
async def list_documents(
    owner_id: str = Depends(get_data_owner_id),
    repository: DocumentRepository = Depends(get_document_repository),
) -> list[DocumentResponse]:
    documents = await repository.list_documents(owner_id)
    return [DocumentResponse.model_validate(d) for d in documents]
