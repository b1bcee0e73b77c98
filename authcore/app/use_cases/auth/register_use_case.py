"""
Register Use Case

Creates an inactive identity, provisions its primary account and sends the
activation email.
"""

import logging
from datetime import timedelta

from sqlalchemy.exc import IntegrityError

from authcore.libs.result import Error, Result, Return
from authcore.app.services.email_sender import IEmailSender
from authcore.app.services.password_hasher import IPasswordHasher
from authcore.app.services.unit_of_work import UnitOfWork
from authcore.domain.base import generate_activation_token, generate_public_id, utcnow
from authcore.domain.entities import Account, User
from .activation_email import dispatch_activation_email
from .dtos import RegisterCommand, RegisterResponse

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Command/Response Pattern:
    - Input: RegisterCommand (validated business intent)
    - Output: Result[RegisterResponse]

    Business Logic:
    1. Reject an email that is already registered (checked up front and
       again through the unique index when the row is inserted)
    2. Reject password != confirm_password
    3. Hash password
    4. Generate a 256-bit activation token with a short expiry
    5. Persist the inactive user
    6. Provision the primary account; on failure delete the user and re-raise
    7. Send the activation email (failure is logged, never fatal)
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: IPasswordHasher,
        email_sender: IEmailSender,
        activation_ttl: timedelta = timedelta(minutes=30),
        default_currency: str = "MXN",
        email_timeout: float = 10.0,
    ):
        self.uow = uow
        self.hasher = hasher
        self.email_sender = email_sender
        self.activation_ttl = activation_ttl
        self.default_currency = default_currency
        self.email_timeout = email_timeout

    async def _generate_unique_public_id(self) -> str:
        while True:
            candidate = generate_public_id()
            if await self.uow.users.get_by_id(candidate) is None:
                return candidate

    async def execute(self, command: RegisterCommand) -> Result[RegisterResponse]:
        """
        Execute register use case

        Args:
            command: RegisterCommand with credentials and profile

        Returns:
            Result[RegisterResponse] with the new user id,
            or Error(EMAIL_ALREADY_EXISTS | PASSWORD_MISMATCH)
        """
        async with self.uow:
            existing_user = await self.uow.users.get_by_email(command.email)
            if existing_user:
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "Email already registered")
                )

            if command.password != command.confirm_password:
                return Return.err(
                    Error("PASSWORD_MISMATCH", "Passwords do not match")
                )

            activation_token = generate_activation_token()
            currency = command.currency or self.default_currency

            user = User(
                public_id=await self._generate_unique_public_id(),
                email=command.email,
                password_hash=self.hasher.hash(command.password),
                full_name=command.full_name,
                age=command.age,
                occupation=command.occupation,
                primary_currency=currency,
                is_active=False,
                activation_token=activation_token,
                activation_expires_at=utcnow() + self.activation_ttl,
            )
            try:
                user = await self.uow.users.create(user)
                await self.uow.commit()
            except IntegrityError:
                # A concurrent registration claimed the email after our check
                await self.uow.rollback()
                logger.info("Duplicate email rejected by the unique index")
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "Email already registered")
                )
            user_id = user.public_id

            # Step two: the primary account. The identity must not outlive a
            # failed provisioning.
            try:
                account = await self.uow.accounts.create(
                    Account(user_id=user_id, currency=currency)
                )
                user.active_account_id = str(account.id)
                user = await self.uow.users.update(user)
                await self.uow.commit()
            except Exception:
                logger.exception(
                    f"Account provisioning failed for user {user_id}, deleting identity"
                )
                await self.uow.rollback()
                await self.uow.users.delete_by_id(user_id)
                await self.uow.commit()
                raise

            await dispatch_activation_email(
                self.email_sender, user, activation_token, self.email_timeout
            )

            logger.info(f"Registered user {user_id}")
            return Return.ok(
                RegisterResponse(user_id=user_id, message="User registered successfully")
            )
