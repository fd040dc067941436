"""
FastAPI dependencies for database repositories.

Each repository is bound to the request's session from `get_db`.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from crtlo.db.ai_analyses.repository import AIAnalysisRepository
from crtlo.db.database import get_db
from crtlo.db.documents.repository import DocumentRepository
from crtlo.db.properties.repository import PropertyRepository
from crtlo.db.rtlo_questions.repository import RTLOQuestionRepository
from crtlo.db.users.repository import UserRepository


def get_user_repository(session: AsyncSession = Depends(get_db)) -> UserRepository:
    """
    FastAPI dependency for getting the user repository.

    Args:
        session: Database session from get_db dependency

    Returns:
        UserRepository: Repository instance with injected session
    """
    return UserRepository(session)


def get_property_repository(
    session: AsyncSession = Depends(get_db),
) -> PropertyRepository:
    return PropertyRepository(session)


def get_rtlo_question_repository(
    session: AsyncSession = Depends(get_db),
) -> RTLOQuestionRepository:
    return RTLOQuestionRepository(session)


def get_document_repository(
    session: AsyncSession = Depends(get_db),
) -> DocumentRepository:
    return DocumentRepository(session)


def get_ai_analysis_repository(
    session: AsyncSession = Depends(get_db),
) -> AIAnalysisRepository:
    return AIAnalysisRepository(session)
