"""
Confirm Activation Use Case

Consumes a single-use activation token.
"""

import logging
from typing import List, Optional
from urllib.parse import unquote

from authcore.libs.result import Error, Result, Return
from authcore.app.services.unit_of_work import UnitOfWork
from authcore.domain.base import utcnow
from authcore.domain.entities import User
from .dtos import ConfirmActivationResponse

logger = logging.getLogger(__name__)


class ConfirmActivationUseCase:
    """
    Use case for account activation.

    Business Rules:
    - A token activates its account exactly once, then is cleared
    - Primary path: conditional update "token matches AND not expired AND inactive"
    - Fallback, only when the primary path matched nothing:
        a. retry with the URL-decoded token when decoding changes it
        b. look the token up ignoring expiry:
           expired -> ACTIVATION_EXPIRED,
           not expired -> force activation (conditional on the token)
        c. otherwise ACTIVATION_INVALID
    - Success is reported only after re-reading is_active == True
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @staticmethod
    def _candidates(token: str) -> List[str]:
        decoded = unquote(token)
        if decoded != token:
            return [token, decoded]
        return [token]

    async def _recover(self, candidates: List[str]) -> Result[Optional[User]]:
        """Step b of the fallback ladder"""
        for candidate in candidates:
            user = await self.uow.users.get_by_activation_token(candidate)
            if user is None:
                continue

            if user.activation_expires_at is None or user.activation_expires_at <= utcnow():
                return Return.err(
                    Error(
                        "ACTIVATION_EXPIRED",
                        "Activation token has expired. Please request a new activation email.",
                    )
                )

            logger.warning(
                f"Conditional activation missed an unexpired token for user "
                f"{user.public_id}, forcing activation"
            )
            if await self.uow.users.force_activate(user.public_id, candidate):
                return Return.ok(user)

        return Return.ok(None)

    async def execute(self, token: str) -> Result[ConfirmActivationResponse]:
        """
        Execute account activation use case.

        Args:
            token: Activation token from the email link

        Returns:
            Result with activation status, or Error

        Errors:
            - ACTIVATION_INVALID: Token unknown or already used
            - ACTIVATION_EXPIRED: Token found but past its expiry
            - ACTIVATION_FAILED: Write reported success but the account is not active
        """
        candidates = self._candidates(token)

        async with self.uow:
            activated: Optional[User] = None
            for candidate in candidates:
                activated = await self.uow.users.activate_by_token(candidate, utcnow())
                if activated is not None:
                    break

            if activated is None:
                recovered = await self._recover(candidates)
                if recovered.is_err():
                    return Return.err(recovered.error)
                activated = recovered.value

            if activated is None:
                return Return.err(
                    Error("ACTIVATION_INVALID", "Invalid or expired activation token")
                )

            await self.uow.commit()

            user = await self.uow.users.get_by_id(activated.public_id)
            if user is None or not user.is_active:
                logger.error(
                    f"Activation of user {activated.public_id} did not persist"
                )
                return Return.err(
                    Error("ACTIVATION_FAILED", "Account could not be activated")
                )

            logger.info(f"Activated user {user.public_id}")
            return Return.ok(
                ConfirmActivationResponse(
                    status="activated", message="Account activated successfully"
                )
            )
