"""SQLAlchemy model for server-side login sessions."""

from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, Index, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from crtlo.db.database import Base


class SessionRecord(Base):
    __tablename__ = "sessions"

    sid: Mapped[str] = mapped_column(String(128), primary_key=True)
    sess: Mapped[dict[str, Any]] = mapped_column(
        JSONB, nullable=False, comment="Serialized session data"
    )
    expire: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (Index("idx_session_expire", "expire"),)

    def __repr__(self) -> str:
        return f"<SessionRecord(sid={self.sid[:8]}..., expire={self.expire})>"
