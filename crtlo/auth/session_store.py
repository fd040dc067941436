"""
Session stores.

The store owns persistence of session payloads; request handlers only see
the `RequestSession` built for them by `crtlo.auth.sessions.SessionManager`.
"""

import asyncio
import time
from abc import ABC, abstractmethod
from datetime import UTC, datetime, timedelta
from typing import Any

from cachetools import TLRUCache
from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from crtlo.db.sessions.model import SessionRecord
from crtlo.utils.logger import logger


class SessionStore(ABC):
    """Abstract interface for session persistence."""

    @abstractmethod
    async def get(self, sid: str) -> dict[str, Any] | None:
        """Return the payload for a live session, or None."""
        pass

    @abstractmethod
    async def set(self, sid: str, data: dict[str, Any], ttl_seconds: int) -> None:
        """Create or replace a session payload."""
        pass

    @abstractmethod
    async def destroy(self, sid: str) -> None:
        """Delete a session if it exists."""
        pass

    @abstractmethod
    async def prune_expired(self) -> int:
        """Delete expired sessions and return how many were removed."""
        pass


class InMemorySessionStore(SessionStore):
    """Process-local store for tests and single-process development.

    Entries expire individually after the TTL they were saved with.
    """

    def __init__(self, maxsize: int = 10_000, timer=time.monotonic) -> None:
        self._sessions: TLRUCache = TLRUCache(
            maxsize=maxsize,
            ttu=lambda _sid, entry, now: now + entry[0],
            timer=timer,
        )

    async def get(self, sid: str) -> dict[str, Any] | None:
        entry = self._sessions.get(sid)
        return entry[1] if entry is not None else None

    async def set(self, sid: str, data: dict[str, Any], ttl_seconds: int) -> None:
        self._sessions[sid] = (ttl_seconds, data)

    async def destroy(self, sid: str) -> None:
        self._sessions.pop(sid, None)

    async def prune_expired(self) -> int:
        before = len(self._sessions)
        self._sessions.expire()
        return before - len(self._sessions)


class DatabaseSessionStore(SessionStore):
    """PostgreSQL store backed by the `sessions` table.

    Each operation runs in its own short transaction so session writes do
    not depend on the request's data transaction.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def get(self, sid: str) -> dict[str, Any] | None:
        async with self.session_factory() as session:
            result = await session.execute(
                select(SessionRecord).where(
                    SessionRecord.sid == sid,
                    SessionRecord.expire > datetime.now(UTC),
                )
            )
            record = result.scalar_one_or_none()
            return record.sess if record else None

    async def set(self, sid: str, data: dict[str, Any], ttl_seconds: int) -> None:
        expire = datetime.now(UTC) + timedelta(seconds=ttl_seconds)
        stmt = (
            insert(SessionRecord)
            .values(sid=sid, sess=data, expire=expire)
            .on_conflict_do_update(
                index_elements=[SessionRecord.sid],
                set_={"sess": data, "expire": expire},
            )
        )
        async with self.session_factory() as session:
            await session.execute(stmt)
            await session.commit()

    async def destroy(self, sid: str) -> None:
        async with self.session_factory() as session:
            await session.execute(delete(SessionRecord).where(SessionRecord.sid == sid))
            await session.commit()
        logger.debug("[DatabaseSessionStore] Destroyed session", sid_prefix=sid[:8])

    async def prune_expired(self) -> int:
        async with self.session_factory() as session:
            result = await session.execute(
                delete(SessionRecord).where(SessionRecord.expire <= datetime.now(UTC))
            )
            await session.commit()
        removed = result.rowcount or 0
        logger.debug("[DatabaseSessionStore] Pruned expired sessions", removed=removed)
        return removed


async def prune_sessions_periodically(
    store: SessionStore, interval_seconds: float
) -> None:
    """Delete expired sessions every `interval_seconds` until cancelled."""
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            await store.prune_expired()
        except SQLAlchemyError as e:
            logger.exception("Failed to prune expired sessions", error=str(e))
