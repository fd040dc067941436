"""
RTLO assistant use cases on top of the gateway client.

Each use case builds its prompt, calls the gateway, and coerces whatever
the model returned into a well-formed result: scores are clamped,
confidence values normalized, and malformed lists replaced with empty ones.
"""

import json
import math
import re
from typing import Any

from crtlo.ai.gateway.client import ChittyGatewayClient
from crtlo.ai.gateway.constants import (
    FALLBACK_ANSWER,
    FALLBACK_DOCUMENT,
    MAX_COMPLIANCE_SCORE,
    MIN_COMPLIANCE_SCORE,
    ChatRole,
    Confidence,
    DocumentType,
)
from crtlo.ai.gateway.exceptions import GatewayError, GatewayResponseError
from crtlo.ai.gateway.prompts import (
    DOCUMENT_SYSTEM_PROMPT,
    LEASE_COMPLIANCE_SYSTEM_PROMPT,
    RTLO_QUESTION_SYSTEM_PROMPT,
    document_user_prompt,
    lease_review_user_prompt,
)
from crtlo.ai.gateway.schemas import (
    ChatMessage,
    LeaseComplianceResult,
    LeaseIssue,
    RTLOAnswer,
)
from crtlo.utils.logger import logger

_CODE_FENCE = re.compile(r"^\s*```(?:json)?\s*(.*?)\s*```\s*$", re.DOTALL)


def parse_json_object(text: str) -> dict[str, Any]:
    """Parse a model response that should be a JSON object.

    Raises:
        GatewayResponseError: The text is not a JSON object
    """
    match = _CODE_FENCE.match(text)
    if match:
        text = match.group(1)
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        raise GatewayResponseError(f"Model returned invalid JSON: {e}") from e
    if not isinstance(parsed, dict):
        raise GatewayResponseError("Model returned JSON that is not an object")
    return parsed


def normalize_confidence(value: Any) -> Confidence:
    """Map a reported confidence onto high/medium/low; anything else is low."""
    if isinstance(value, str):
        try:
            return Confidence(value.strip().lower())
        except ValueError:
            pass
    return Confidence.LOW


def clamp_compliance_score(value: Any) -> int:
    """Coerce a reported score to an int in [0, 100]; unusable values become 0."""
    if isinstance(value, bool):
        return MIN_COMPLIANCE_SCORE
    try:
        score = float(value)
    except (TypeError, ValueError):
        return MIN_COMPLIANCE_SCORE
    if math.isnan(score):
        return MIN_COMPLIANCE_SCORE
    return int(round(max(MIN_COMPLIANCE_SCORE, min(MAX_COMPLIANCE_SCORE, score))))


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_rtlo_answer(payload: dict[str, Any]) -> RTLOAnswer:
    return RTLOAnswer(
        answer=_optional_text(payload.get("answer")) or FALLBACK_ANSWER,
        rtlo_section=_optional_text(payload.get("rtloSection")),
        confidence=normalize_confidence(payload.get("confidence")),
    )


def parse_lease_compliance(payload: dict[str, Any]) -> LeaseComplianceResult:
    raw_issues = payload.get("issues")
    raw_recommendations = payload.get("recommendations")

    issues = []
    if isinstance(raw_issues, list):
        for raw in raw_issues:
            if not isinstance(raw, dict):
                continue
            issues.append(
                LeaseIssue(
                    section=_optional_text(raw.get("section")),
                    issue=str(raw.get("issue") or ""),
                    severity=normalize_confidence(raw.get("severity")),
                    recommendation=str(raw.get("recommendation") or ""),
                )
            )

    recommendations = []
    if isinstance(raw_recommendations, list):
        recommendations = [
            item if isinstance(item, str) else json.dumps(item)
            for item in raw_recommendations
            if item is not None
        ]

    return LeaseComplianceResult(
        compliance_score=clamp_compliance_score(payload.get("complianceScore")),
        issues=issues,
        recommendations=recommendations,
    )


class RTLOAssistantService:
    """RTLO Q&A, lease review and document generation."""

    def __init__(self, client: ChittyGatewayClient):
        self.client = client

    async def analyze_rtlo_question(self, question: str) -> RTLOAnswer:
        """Answer a question about the Chicago RTLO.

        Raises:
            GatewayError: "Failed to analyze RTLO question: ..."
        """
        try:
            response = await self.client.chat_completion(
                [
                    ChatMessage(role=ChatRole.SYSTEM, content=RTLO_QUESTION_SYSTEM_PROMPT),
                    ChatMessage(role=ChatRole.USER, content=question),
                ],
                json_mode=True,
            )
            return parse_rtlo_answer(parse_json_object(response))
        except GatewayError as e:
            logger.error("Error analyzing RTLO question", error=str(e))
            raise GatewayError(
                f"Failed to analyze RTLO question: {e.message}", original_error=e
            ) from e

    async def analyze_lease_compliance(self, lease_text: str) -> LeaseComplianceResult:
        """Score a lease against the RTLO and list the issues found.

        Raises:
            GatewayError: "Failed to analyze lease compliance: ..."
        """
        try:
            response = await self.client.chat_completion(
                [
                    ChatMessage(
                        role=ChatRole.SYSTEM, content=LEASE_COMPLIANCE_SYSTEM_PROMPT
                    ),
                    ChatMessage(
                        role=ChatRole.USER, content=lease_review_user_prompt(lease_text)
                    ),
                ],
                json_mode=True,
            )
            return parse_lease_compliance(parse_json_object(response))
        except GatewayError as e:
            logger.error("Error analyzing lease compliance", error=str(e))
            raise GatewayError(
                f"Failed to analyze lease compliance: {e.message}", original_error=e
            ) from e

    async def generate_rtlo_document(
        self, document_type: str, data: dict[str, Any]
    ) -> str:
        """Generate the text of an RTLO document.

        Raises:
            GatewayError: "Failed to generate document: ..."
        """
        if document_type not in {t.value for t in DocumentType}:
            logger.info(
                "Generating document of a type the prompt does not describe",
                document_type=document_type,
            )

        try:
            response = await self.client.chat_completion(
                [
                    ChatMessage(role=ChatRole.SYSTEM, content=DOCUMENT_SYSTEM_PROMPT),
                    ChatMessage(
                        role=ChatRole.USER,
                        content=document_user_prompt(document_type, data),
                    ),
                ]
            )
        except GatewayError as e:
            logger.error(
                "Error generating RTLO document",
                document_type=document_type,
                error=str(e),
            )
            raise GatewayError(
                f"Failed to generate document: {e.message}", original_error=e
            ) from e

        return response or FALLBACK_DOCUMENT
