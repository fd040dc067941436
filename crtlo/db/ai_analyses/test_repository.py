"""
Unit tests for AIAnalysisRepository and the analysis response schema.
"""

import json
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from crtlo.ai.gateway.constants import Confidence
from crtlo.ai.gateway.schemas import LeaseComplianceResult, LeaseIssue
from crtlo.db.ai_analyses.model import AIAnalysis
from crtlo.db.ai_analyses.repository import AIAnalysisRepository
from crtlo.db.ai_analyses.schemas import AIAnalysisResponse


@pytest.fixture
def mock_session():
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def result():
    return LeaseComplianceResult(
        compliance_score=62,
        issues=[
            LeaseIssue(
                section="5-12-080",
                issue="Security deposit interest not addressed",
                severity=Confidence.HIGH,
                recommendation="State the annual interest rate",
            )
        ],
        recommendations=["Attach the RTLO summary"],
    )


@pytest.mark.asyncio
async def test_create_analysis_stores_serialized_result(mock_session, result):
    repository = AIAnalysisRepository(mock_session)

    record = await repository.create_analysis(
        user_id="anonymous", original_text="Lease text", result=result
    )

    stored = json.loads(record.analysis)
    assert stored["complianceScore"] == 62
    assert stored["issues"][0]["severity"] == "high"
    assert record.analysis_type == "lease-review"
    assert record.compliance_score == 62
    assert record.recommendations == ["Attach the RTLO summary"]
    mock_session.add.assert_called_once_with(record)


def test_response_parses_stored_json(result):
    record = AIAnalysis(
        id="6f1c2e0a-1111-4b7b-9a38-0c4b8a2f7d10",
        user_id="anonymous",
        analysis_type="lease-review",
        original_text="Lease text",
        analysis=result.model_dump_json(by_alias=True),
        recommendations=result.recommendations,
        compliance_score=62,
        created_at=datetime(2026, 3, 1, tzinfo=timezone.utc),
    )

    response = AIAnalysisResponse.model_validate(record)
    body = response.model_dump(by_alias=True)

    assert response.analysis.compliance_score == 62
    assert body["analysis"]["issues"][0]["section"] == "5-12-080"
    assert body["complianceScore"] == 62


def test_response_with_empty_analysis():
    record = AIAnalysis(
        id="6f1c2e0a-1111-4b7b-9a38-0c4b8a2f7d10",
        user_id="anonymous",
        analysis_type="lease-review",
        original_text="Lease text",
        analysis="",
        recommendations=[],
    )

    assert AIAnalysisResponse.model_validate(record).analysis is None
