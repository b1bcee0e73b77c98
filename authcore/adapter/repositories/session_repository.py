from datetime import datetime
from typing import Optional
from uuid import uuid4

from sqlalchemy.dialects import postgresql, sqlite
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from authcore.app.repositories.session_repository import ISessionRepository
from authcore.domain.entities import Session


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel

    Every read uses populate_existing so a row is never served from the
    identity map; every write is a single conditional statement.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    def _insert(self):
        if self.session.bind.dialect.name == "postgresql":
            return postgresql.insert(Session)
        return sqlite.insert(Session)

    async def get_by_user_and_device(
        self, user_id: str, device_id: str
    ) -> Optional[Session]:
        """Get session for a (user, device) pair"""
        stmt = (
            select(Session)
            .where(Session.user_id == user_id, Session.device_id == device_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def upsert(
        self,
        user_id: str,
        device_id: str,
        jti: str,
        refresh_hash: str,
        expires_at: datetime,
        now: datetime,
    ) -> Session:
        """INSERT ... ON CONFLICT (user_id, device_id) DO UPDATE"""
        stmt = self._insert().values(
            id=uuid4(),
            user_id=user_id,
            device_id=device_id,
            jti=jti,
            refresh_hash=refresh_hash,
            revoked=False,
            revoked_at=None,
            created_at=now,
            expires_at=expires_at,
            last_used_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "device_id"],
            set_={
                "jti": jti,
                "refresh_hash": refresh_hash,
                "revoked": False,
                "revoked_at": None,
                "expires_at": expires_at,
                "last_used_at": now,
            },
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return await self.get_by_user_and_device(user_id, device_id)

    async def rotate(
        self,
        user_id: str,
        device_id: str,
        expected_hash: str,
        jti: str,
        refresh_hash: str,
        expires_at: datetime,
        now: datetime,
    ) -> bool:
        """Compare-and-set on refresh_hash"""
        stmt = (
            update(Session)
            .where(
                Session.user_id == user_id,
                Session.device_id == device_id,
                Session.refresh_hash == expected_hash,
                Session.revoked == False,  # noqa: E712
            )
            .values(
                jti=jti,
                refresh_hash=refresh_hash,
                expires_at=expires_at,
                last_used_at=now,
                revoked=False,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def revoke(self, user_id: str, device_id: str, now: datetime) -> bool:
        """Revoke the (user, device) session if it is still active"""
        stmt = (
            update(Session)
            .where(
                Session.user_id == user_id,
                Session.device_id == device_id,
                Session.revoked == False,  # noqa: E712
            )
            .values(revoked=True, revoked_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
