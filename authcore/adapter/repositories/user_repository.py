from datetime import datetime
from typing import Optional

from sqlalchemy import delete
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from authcore.app.repositories.user_repository import IUserRepository
from authcore.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = (
            select(User)
            .where(User.email == email)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by public id"""
        stmt = (
            select(User)
            .where(User.public_id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def delete_by_id(self, user_id: str) -> bool:
        """Delete user by public id"""
        stmt = (
            delete(User)
            .where(User.public_id == user_id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def get_by_activation_token(self, token: str) -> Optional[User]:
        """Get user by activation token, expired or not"""
        stmt = (
            select(User)
            .where(User.activation_token == token)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def activate_by_token(self, token: str, now: datetime) -> Optional[User]:
        """
        Activate the holder of an unexpired token with a conditional UPDATE.

        The id is looked up first only to know which row to return; the
        token/expiry/inactive condition is re-checked inside the UPDATE, so
        two concurrent confirmations cannot both match.
        """
        stmt = select(User.public_id).where(
            User.activation_token == token,
            User.activation_expires_at > now,
            User.is_active == False,  # noqa: E712
        )
        result = await self.session.exec(stmt)
        user_id = result.one_or_none()
        if user_id is None:
            return None

        stmt = (
            update(User)
            .where(
                User.public_id == user_id,
                User.activation_token == token,
                User.activation_expires_at > now,
                User.is_active == False,  # noqa: E712
            )
            .values(is_active=True, activation_token=None, activation_expires_at=None)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        if result.rowcount != 1:
            return None
        return await self.get_by_id(user_id)

    async def force_activate(self, user_id: str, token: str) -> bool:
        """Activate the user if it still holds `token`, ignoring expiry"""
        stmt = (
            update(User)
            .where(User.public_id == user_id, User.activation_token == token)
            .values(is_active=True, activation_token=None, activation_expires_at=None)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def replace_activation_token(
        self, user_id: str, token: str, expires_at: datetime
    ) -> bool:
        """Overwrite the pending token; no-op once the user is active"""
        stmt = (
            update(User)
            .where(User.public_id == user_id, User.is_active == False)  # noqa: E712
            .values(activation_token=token, activation_expires_at=expires_at)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1
