"""
Logout Use Case

Revokes one device session.
"""

from authcore.libs.result import Result, Return
from authcore.app.services.unit_of_work import UnitOfWork
from authcore.domain.base import utcnow
from .dtos import LogoutResponse


class LogoutUseCase:
    """
    Use case for logging a device out.

    Idempotent: logging out twice, or logging out a device that never had a
    session, both succeed since the device already cannot refresh.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str, device_id: str) -> Result[LogoutResponse]:
        async with self.uow:
            await self.uow.sessions.revoke(user_id, device_id, utcnow())
            await self.uow.commit()

        return Return.ok(
            LogoutResponse(status="logged_out", message="Session closed")
        )
