from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from authcore.domain.entities import User


class IUserRepository(ABC):
    """Identity store interface - application layer

    `user_id` arguments are the public handle (User.public_id).
    """

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by public id"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def delete_by_id(self, user_id: str) -> bool:
        """Delete a user. Returns True if a row was removed."""
        pass

    @abstractmethod
    async def get_by_activation_token(self, token: str) -> Optional[User]:
        """Get user holding this activation token, regardless of expiry"""
        pass

    @abstractmethod
    async def activate_by_token(self, token: str, now: datetime) -> Optional[User]:
        """
        Conditionally activate the user holding an unexpired token.

        Sets is_active=True and clears the token/expiry in a single
        conditional write. Returns the activated user, or None when no
        row satisfied the condition.
        """
        pass

    @abstractmethod
    async def force_activate(self, user_id: str, token: str) -> bool:
        """Activate the user if it still holds `token`, ignoring expiry"""
        pass

    @abstractmethod
    async def replace_activation_token(
        self, user_id: str, token: str, expires_at: datetime
    ) -> bool:
        """Overwrite the pending token while the user is still inactive"""
        pass
