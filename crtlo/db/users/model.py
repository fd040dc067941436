"""
SQLAlchemy model for users.

Authentication is handled by the OIDC provider; this table mirrors the
profile claims received at login.
"""

from datetime import UTC, datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from crtlo.db.database import Base


class User(Base):
    """Profile record keyed by the provider's `sub` claim."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(255), primary_key=True, comment="OIDC subject (sub claim)"
    )
    email: Mapped[str | None] = mapped_column(
        String(255), unique=True, nullable=True, comment="User email address"
    )
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    profile_image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        comment="Record creation timestamp",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        comment="Record last update timestamp",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
