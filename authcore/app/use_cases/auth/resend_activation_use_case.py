"""
Resend Activation Use Case

Issues a fresh activation token and re-sends the email.
"""

from datetime import timedelta

from authcore.libs.result import Result, Return
from authcore.app.services.email_sender import IEmailSender
from authcore.app.services.unit_of_work import UnitOfWork
from authcore.domain.base import generate_activation_token, utcnow
from .activation_email import dispatch_activation_email
from .dtos import ResendActivationResponse

GENERIC_SENT_MESSAGE = "If the email exists, an activation link has been sent"


class ResendActivationUseCase:
    """
    Use case for resending the activation email.

    Business Rules:
    - Unknown email returns the generic "sent" response (no enumeration)
    - Active account returns "already_activated" and issues nothing
    - Otherwise the new token overwrites the old one, so only the newest
      link works
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_sender: IEmailSender,
        activation_ttl: timedelta = timedelta(minutes=30),
        email_timeout: float = 10.0,
    ):
        self.uow = uow
        self.email_sender = email_sender
        self.activation_ttl = activation_ttl
        self.email_timeout = email_timeout

    async def execute(self, email: str) -> Result[ResendActivationResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                return Return.ok(
                    ResendActivationResponse(status="sent", message=GENERIC_SENT_MESSAGE)
                )

            already_activated = ResendActivationResponse(
                status="already_activated", message="Account is already activated"
            )
            if user.is_active:
                return Return.ok(already_activated)

            new_token = generate_activation_token()
            replaced = await self.uow.users.replace_activation_token(
                user.public_id, new_token, utcnow() + self.activation_ttl
            )
            if not replaced:
                # Activated between the read and the write
                return Return.ok(already_activated)

            await self.uow.commit()

            await dispatch_activation_email(
                self.email_sender, user, new_token, self.email_timeout
            )

            return Return.ok(
                ResendActivationResponse(status="sent", message=GENERIC_SENT_MESSAGE)
            )
