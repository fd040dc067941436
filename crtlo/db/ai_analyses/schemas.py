"""Request and response schemas for AI lease reviews."""

import json
from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from crtlo.ai.gateway.schemas import LeaseComplianceResult
from crtlo.schemas import CamelModel


class AIAnalysisCreate(CamelModel):
    """Body of POST /api/ai-analysis."""

    lease_text: str = Field(..., min_length=1, description="Full lease text")
    document_id: str | None = Field(default=None, max_length=64)


class AIAnalysisResponse(CamelModel):
    id: str
    user_id: str
    document_id: str | None = None
    analysis_type: str
    original_text: str
    analysis: LeaseComplianceResult | None = None
    recommendations: list[str] = Field(default_factory=list)
    compliance_score: int | None = None
    created_at: datetime | None = None

    @field_validator("analysis", mode="before")
    @classmethod
    def parse_stored_analysis(cls, value: Any) -> Any:
        """Stored rows keep the analysis as a JSON string."""
        if isinstance(value, str):
            return json.loads(value) if value else None
        return value
