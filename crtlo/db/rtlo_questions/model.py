"""SQLAlchemy model for answered RTLO questions."""

from datetime import UTC, datetime

from sqlalchemy import DateTime, Index, String, Text, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from crtlo.db.database import Base


class RTLOQuestion(Base):
    __tablename__ = "rtlo_questions"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
        comment="Question UUID",
    )
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    question: Mapped[str] = mapped_column(Text, nullable=False)
    answer: Mapped[str | None] = mapped_column(Text, nullable=True)
    rtlo_section: Mapped[str | None] = mapped_column(
        Text, nullable=True, comment="Cited section, e.g. 5-12-080"
    )
    confidence: Mapped[str | None] = mapped_column(
        String(10), nullable=True, comment="high, medium, or low"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        comment="Record creation timestamp",
    )

    __table_args__ = (
        Index("idx_rtlo_questions_user_created", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<RTLOQuestion(id={self.id}, section={self.rtlo_section})>"
