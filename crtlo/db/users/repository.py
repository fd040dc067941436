"""Repository for user profile records."""

from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from crtlo.db.users.model import User
from crtlo.db.users.schemas import UserUpsert
from crtlo.utils.logger import logger


class UserRepository:
    """Reads and upserts users."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_user(self, user_id: str) -> User | None:
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def upsert_user(self, data: UserUpsert) -> User:
        """
        Insert the user or overwrite its profile fields if it already exists.

        Args:
            data: Profile fields taken from OIDC claims

        Returns:
            User: The stored record
        """
        values = data.model_dump()
        stmt = (
            insert(User)
            .values(**values)
            .on_conflict_do_update(
                index_elements=[User.id],
                set_={
                    **{key: value for key, value in values.items() if key != "id"},
                    "updated_at": datetime.now(UTC),
                },
            )
            .returning(User)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        user = result.scalar_one()

        logger.info("[UserRepository] Upserted user", user_id=user.id)
        return user
