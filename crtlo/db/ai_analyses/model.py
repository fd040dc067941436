"""SQLAlchemy model for AI lease reviews."""

from datetime import UTC, datetime

from sqlalchemy import DateTime, Index, Integer, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from crtlo.db.database import Base


class AIAnalysis(Base):
    """
    Result of an AI compliance review.

    `analysis` holds the full parsed result serialized as a JSON string;
    readers parse it back before returning it.
    """

    __tablename__ = "ai_analyses"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
        comment="Analysis UUID",
    )
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    document_id: Mapped[str | None] = mapped_column(String(64), nullable=True)

    analysis_type: Mapped[str] = mapped_column(String(32), nullable=False)
    original_text: Mapped[str] = mapped_column(Text, nullable=False)
    analysis: Mapped[str | None] = mapped_column(Text, nullable=True)
    recommendations: Mapped[list[str]] = mapped_column(
        JSONB, nullable=False, default=list
    )
    compliance_score: Mapped[int | None] = mapped_column(
        Integer, nullable=True, comment="0-100"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        comment="Record creation timestamp",
    )

    __table_args__ = (Index("idx_ai_analyses_user_created", "user_id", "created_at"),)

    def __repr__(self) -> str:
        return f"<AIAnalysis(id={self.id}, score={self.compliance_score})>"
