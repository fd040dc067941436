"""SQLAlchemy model for generated RTLO documents."""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import DateTime, Index, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from crtlo.db.database import Base


class Document(Base):
    """
    A document produced by the AI gateway.

    The request's free-form `data` is kept as `metadata`; the attribute is
    named `document_metadata` because `metadata` is reserved on declarative
    models.
    """

    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
        comment="Document UUID",
    )
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    property_id: Mapped[str | None] = mapped_column(
        String(64), nullable=True, comment="Related property, not enforced"
    )

    document_type: Mapped[str] = mapped_column(String(64), nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    document_metadata: Mapped[dict[str, Any]] = mapped_column(
        "metadata", JSONB, nullable=False, default=dict
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        comment="Record creation timestamp",
    )

    __table_args__ = (Index("idx_documents_user_created", "user_id", "created_at"),)

    def __repr__(self) -> str:
        return f"<Document(id={self.id}, type={self.document_type})>"
