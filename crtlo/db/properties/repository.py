"""Repository for property records."""

from datetime import UTC, datetime

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from crtlo.db.properties.eligibility import is_rtlo_covered
from crtlo.db.properties.model import Property
from crtlo.db.properties.schemas import PropertyCreate
from crtlo.utils.logger import logger


class PropertyRepository:
    """Creates and lists properties, deriving RTLO coverage on insert."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_property(self, user_id: str, data: PropertyCreate) -> Property:
        """
        Store a property together with its coverage flag and verification time.

        Args:
            user_id: Owner of the record
            data: Validated request body

        Returns:
            Property: Created property
        """
        covered = is_rtlo_covered(data.units, data.is_owner_occupied)
        now = datetime.now(UTC)
        prop = Property(
            user_id=user_id,
            address=data.address,
            units=data.units,
            is_owner_occupied=data.is_owner_occupied,
            is_rtlo_covered=covered,
            verification_date=now,
            created_at=now,
        )

        self.session.add(prop)
        await self.session.flush()
        await self.session.refresh(prop)

        logger.info(
            "[PropertyRepository] Created property",
            property_id=prop.id,
            user_id=user_id,
            is_rtlo_covered=covered,
        )
        return prop

    async def list_properties(self, user_id: str) -> list[Property]:
        """List a user's properties, newest first."""
        stmt = (
            select(Property)
            .where(Property.user_id == user_id)
            .order_by(desc(Property.created_at))
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
