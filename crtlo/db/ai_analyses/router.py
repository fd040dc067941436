"""
AI analysis router.

Lease reviews are stored with the full result serialized to JSON and are
parsed back into objects when listed.
"""

from fastapi import APIRouter, Depends

from crtlo.ai.gateway.dependencies import get_rtlo_assistant_service
from crtlo.ai.gateway.service import RTLOAssistantService
from crtlo.auth.dependencies import get_data_owner_id
from crtlo.db.ai_analyses.repository import AIAnalysisRepository
from crtlo.db.ai_analyses.schemas import AIAnalysisCreate, AIAnalysisResponse
from crtlo.db.decorators import handle_route_errors
from crtlo.db.dependencies import get_ai_analysis_repository

router = APIRouter(tags=["AI Analysis"])


@router.post("/ai-analysis", response_model=AIAnalysisResponse)
@handle_route_errors("perform AI analysis")
async def analyze_lease(
    request: AIAnalysisCreate,
    owner_id: str = Depends(get_data_owner_id),
    repository: AIAnalysisRepository = Depends(get_ai_analysis_repository),
    assistant: RTLOAssistantService = Depends(get_rtlo_assistant_service),
) -> AIAnalysisResponse:
    """
    Review a lease for RTLO compliance and store the result.

    Args:
        request: Lease text and optional related document
        owner_id: Owner of the new record
        repository: The analysis repository instance from dependency injection
        assistant: Gateway-backed RTLO assistant

    Returns:
        AIAnalysisResponse: The stored analysis with `analysis` as an object
    """
    result = await assistant.analyze_lease_compliance(request.lease_text)
    record = await repository.create_analysis(
        user_id=owner_id,
        original_text=request.lease_text,
        result=result,
        document_id=request.document_id,
    )
    await repository.session.commit()
    return AIAnalysisResponse.model_validate(record)


@router.get("/ai-analyses", response_model=list[AIAnalysisResponse])
@handle_route_errors("fetch analyses")
async def list_analyses(
    owner_id: str = Depends(get_data_owner_id),
    repository: AIAnalysisRepository = Depends(get_ai_analysis_repository),
) -> list[AIAnalysisResponse]:
    analyses = await repository.list_analyses(owner_id)
    return [AIAnalysisResponse.model_validate(a) for a in analyses]
