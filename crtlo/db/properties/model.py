"""SQLAlchemy model for verified properties."""

from datetime import UTC, datetime

from sqlalchemy import Boolean, DateTime, Index, Integer, String, Text, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from crtlo.db.database import Base


class Property(Base):
    """
    A property submitted for RTLO verification.

    `is_rtlo_covered` is computed once when the row is created and never
    recomputed afterwards.
    """

    __tablename__ = "properties"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
        comment="Property UUID",
    )
    user_id: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True, comment="Owning user id"
    )

    address: Mapped[str] = mapped_column(Text, nullable=False)
    units: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    is_owner_occupied: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    is_rtlo_covered: Mapped[bool] = mapped_column(
        Boolean, nullable=False, comment="Derived at creation"
    )
    verification_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        comment="Record creation timestamp",
    )

    __table_args__ = (Index("idx_properties_user_created", "user_id", "created_at"),)

    def __repr__(self) -> str:
        return (
            f"<Property(id={self.id}, user_id={self.user_id}, "
            f"units={self.units}, covered={self.is_rtlo_covered})>"
        )
