"""Repository for AI lease review records."""

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from crtlo.ai.gateway.constants import AnalysisType
from crtlo.ai.gateway.schemas import LeaseComplianceResult
from crtlo.db.ai_analyses.model import AIAnalysis
from crtlo.utils.logger import logger


class AIAnalysisRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_analysis(
        self,
        user_id: str,
        original_text: str,
        result: LeaseComplianceResult,
        document_id: str | None = None,
        analysis_type: AnalysisType = AnalysisType.LEASE_REVIEW,
    ) -> AIAnalysis:
        """
        Store a lease review, serializing the full result to JSON.

        Args:
            user_id: Owner of the record
            original_text: Lease text that was reviewed
            result: Parsed and clamped gateway result
            document_id: Optional related document
            analysis_type: Kind of analysis performed

        Returns:
            AIAnalysis: Created record
        """
        record = AIAnalysis(
            user_id=user_id,
            document_id=document_id,
            analysis_type=analysis_type.value,
            original_text=original_text,
            analysis=result.model_dump_json(by_alias=True),
            recommendations=result.recommendations,
            compliance_score=result.compliance_score,
        )

        self.session.add(record)
        await self.session.flush()
        await self.session.refresh(record)

        logger.info(
            "[AIAnalysisRepository] Created analysis",
            analysis_id=record.id,
            compliance_score=record.compliance_score,
        )
        return record

    async def list_analyses(self, user_id: str) -> list[AIAnalysis]:
        stmt = (
            select(AIAnalysis)
            .where(AIAnalysis.user_id == user_id)
            .order_by(desc(AIAnalysis.created_at))
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
