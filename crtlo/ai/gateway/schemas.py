"""Schemas for gateway requests and parsed AI results."""

from typing import Any

from pydantic import BaseModel, Field

from crtlo.ai.gateway.constants import ChatRole, Confidence
from crtlo.schemas import CamelModel


class ChatMessage(BaseModel):
    role: ChatRole
    content: str


class ChatCompletionRequest(BaseModel):
    messages: list[ChatMessage]
    stream: bool = False
    response_format: dict[str, str] | None = None


class ChatCompletionResult(BaseModel):
    # JSON-mode models sometimes return the object itself instead of a string
    response: str | dict[str, Any] | list[Any] | None = None


class ChatCompletionResponse(BaseModel):
    """Workers AI envelope: `{"result": {...}, "success": bool, "errors": [...]}`."""

    result: ChatCompletionResult | None = None
    success: bool
    errors: list[Any] = Field(default_factory=list)


class RTLOAnswer(CamelModel):
    answer: str
    rtlo_section: str | None = None
    confidence: Confidence = Confidence.LOW


class LeaseIssue(CamelModel):
    section: str | None = None
    issue: str = ""
    severity: Confidence = Confidence.LOW
    recommendation: str = ""


class LeaseComplianceResult(CamelModel):
    compliance_score: int = Field(default=0, ge=0, le=100)
    issues: list[LeaseIssue] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
