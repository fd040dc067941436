"""Repository for RTLO question records."""

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from crtlo.ai.gateway.schemas import RTLOAnswer
from crtlo.db.rtlo_questions.model import RTLOQuestion
from crtlo.utils.logger import logger


class RTLOQuestionRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_question(
        self, user_id: str, question: str, answer: RTLOAnswer
    ) -> RTLOQuestion:
        """
        Store a question with the gateway's answer.

        Args:
            user_id: Owner of the record
            question: Question text as asked
            answer: Parsed gateway answer

        Returns:
            RTLOQuestion: Created record
        """
        record = RTLOQuestion(
            user_id=user_id,
            question=question,
            answer=answer.answer,
            rtlo_section=answer.rtlo_section,
            confidence=answer.confidence.value,
        )

        self.session.add(record)
        await self.session.flush()
        await self.session.refresh(record)

        logger.info(
            "[RTLOQuestionRepository] Created question",
            question_id=record.id,
            rtlo_section=record.rtlo_section,
        )
        return record

    async def list_questions(self, user_id: str) -> list[RTLOQuestion]:
        stmt = (
            select(RTLOQuestion)
            .where(RTLOQuestion.user_id == user_id)
            .order_by(desc(RTLOQuestion.created_at))
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
