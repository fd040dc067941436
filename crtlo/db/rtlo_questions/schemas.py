"""Request and response schemas for RTLO Q&A."""

from datetime import datetime

from pydantic import Field

from crtlo.ai.gateway.constants import Confidence
from crtlo.schemas import CamelModel


class RTLOQuestionCreate(CamelModel):
    """Body of POST /api/rtlo-questions."""

    question: str = Field(..., min_length=1, description="Question about the RTLO")


class RTLOQuestionResponse(CamelModel):
    id: str
    user_id: str
    question: str
    answer: str | None = None
    rtlo_section: str | None = None
    confidence: Confidence | None = None
    created_at: datetime | None = None
