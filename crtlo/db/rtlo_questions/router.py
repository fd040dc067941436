"""RTLO Q&A router: answers questions through the AI gateway and keeps a history."""

from fastapi import APIRouter, Depends

from crtlo.ai.gateway.dependencies import get_rtlo_assistant_service
from crtlo.ai.gateway.service import RTLOAssistantService
from crtlo.auth.dependencies import get_data_owner_id
from crtlo.db.decorators import handle_route_errors
from crtlo.db.dependencies import get_rtlo_question_repository
from crtlo.db.rtlo_questions.repository import RTLOQuestionRepository
from crtlo.db.rtlo_questions.schemas import RTLOQuestionCreate, RTLOQuestionResponse

router = APIRouter(prefix="/rtlo-questions", tags=["RTLO Questions"])


@router.post("", response_model=RTLOQuestionResponse)
@handle_route_errors("process question")
async def ask_rtlo_question(
    request: RTLOQuestionCreate,
    owner_id: str = Depends(get_data_owner_id),
    repository: RTLOQuestionRepository = Depends(get_rtlo_question_repository),
    assistant: RTLOAssistantService = Depends(get_rtlo_assistant_service),
) -> RTLOQuestionResponse:
    """
    Answer a question about the RTLO and store it with the answer.

    Nothing is stored when the gateway call fails.

    Args:
        request: The question
        owner_id: Owner of the new record
        repository: The question repository instance from dependency injection
        assistant: Gateway-backed RTLO assistant

    Returns:
        RTLOQuestionResponse: The stored question with answer, section and confidence
    """
    answer = await assistant.analyze_rtlo_question(request.question)
    record = await repository.create_question(owner_id, request.question, answer)
    await repository.session.commit()
    return RTLOQuestionResponse.model_validate(record)


@router.get("", response_model=list[RTLOQuestionResponse])
@handle_route_errors("fetch questions")
async def list_rtlo_questions(
    owner_id: str = Depends(get_data_owner_id),
    repository: RTLOQuestionRepository = Depends(get_rtlo_question_repository),
) -> list[RTLOQuestionResponse]:
    questions = await repository.list_questions(owner_id)
    return [RTLOQuestionResponse.model_validate(q) for q in questions]
