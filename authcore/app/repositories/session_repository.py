from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from authcore.domain.entities import Session


class ISessionRepository(ABC):
    """Session store interface - application layer"""

    @abstractmethod
    async def get_by_user_and_device(
        self, user_id: str, device_id: str
    ) -> Optional[Session]:
        """Get the session for a (user, device) pair, always read from the store"""
        pass

    @abstractmethod
    async def upsert(
        self,
        user_id: str,
        device_id: str,
        jti: str,
        refresh_hash: str,
        expires_at: datetime,
        now: datetime,
    ) -> Session:
        """Atomically create or reset the (user, device) session with revoked=False"""
        pass

    @abstractmethod
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
        """
        Compare-and-set rotation.

        Replaces jti/refresh_hash/expires_at/last_used_at only if the stored
        refresh_hash still equals `expected_hash` and the row is not revoked.
        Returns False when another writer got there first.
        """
        pass

    @abstractmethod
    async def revoke(self, user_id: str, device_id: str, now: datetime) -> bool:
        """Revoke a session. Returns True if a non-revoked row was revoked."""
        pass
