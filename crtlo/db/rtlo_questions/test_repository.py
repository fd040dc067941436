from unittest.mock import AsyncMock

import pytest
from sqlalchemy import Text
from sqlalchemy.ext.asyncio import AsyncSession

from crtlo.ai.gateway.constants import Confidence
from crtlo.ai.gateway.schemas import RTLOAnswer
from crtlo.db.rtlo_questions.model import RTLOQuestion
from crtlo.db.rtlo_questions.repository import RTLOQuestionRepository


@pytest.mark.asyncio
async def test_create_question_stores_answer_fields():
    mock_session = AsyncMock(spec=AsyncSession)
    repository = RTLOQuestionRepository(mock_session)

    record = await repository.create_question(
        "anonymous",
        "How much notice is required before entry?",
        RTLOAnswer(
            answer="Two days.", rtlo_section="5-12-050", confidence=Confidence.MEDIUM
        ),
    )

    assert record.answer == "Two days."
    assert record.rtlo_section == "5-12-050"
    assert record.confidence == "medium"
    mock_session.add.assert_called_once_with(record)
    mock_session.refresh.assert_called_once_with(record)


@pytest.mark.asyncio
async def test_create_question_keeps_long_section_citation():
    mock_session = AsyncMock(spec=AsyncSession)
    repository = RTLOQuestionRepository(mock_session)
    section = "5-12-080 and 5-12-090 (security deposits)"

    record = await repository.create_question(
        "anonymous",
        "Which sections govern deposits?",
        RTLOAnswer(answer="Both.", rtlo_section=section, confidence=Confidence.HIGH),
    )

    assert record.rtlo_section == section
    column_type = RTLOQuestion.__table__.c.rtlo_section.type
    assert isinstance(column_type, Text)
