"""
Login Use Case

Authenticates a user and opens (or resets) the session for one device.
"""

from datetime import timedelta
from typing import Optional

from authcore.libs.result import Error, Result, Return
from authcore.app.services.password_hasher import IPasswordHasher
from authcore.app.services.token_codec import ITokenCodec
from authcore.app.services.unit_of_work import UnitOfWork
from authcore.domain.base import utcnow
from authcore.domain.entities import DEFAULT_DEVICE_ID, UserRole
from .dtos import LoginResponse, UserSummary
from .token_pair import issue_token_pair


class LoginUseCase:
    """
    Use case for user login and token issuance.

    Business Rules:
    - Unknown email -> ACCOUNT_NOT_FOUND
    - Wrong password -> INVALID_CREDENTIALS
    - Inactive account -> ACCOUNT_NOT_ACTIVATED
    - Missing device_id falls back to the shared "default" device, so two
      device-less clients rotate each other out of the same session slot
    - The (user, device) session is upserted with revoked=False: a correct
      password always re-establishes trust for that device
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: IPasswordHasher,
        codec: ITokenCodec,
        session_ttl: timedelta = timedelta(days=30),
    ):
        self.uow = uow
        self.hasher = hasher
        self.codec = codec
        self.session_ttl = session_ttl

    async def execute(
        self, email: str, password: str, device_id: Optional[str] = None
    ) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password
            device_id: Client device identifier, "default" when omitted

        Returns:
            Result with LoginResponse containing tokens and user summary, or Error
        """
        device_id = device_id or DEFAULT_DEVICE_ID

        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is None:
                return Return.err(
                    Error("ACCOUNT_NOT_FOUND", "No account registered with this email")
                )

            if not self.hasher.verify(password, user.password_hash):
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            if not user.is_active:
                return Return.err(
                    Error(
                        "ACCOUNT_NOT_ACTIVATED",
                        "Account is not activated. Check your email for the activation link.",
                    )
                )

            tokens = issue_token_pair(self.codec, user, device_id)

            now = utcnow()
            await self.uow.sessions.upsert(
                user_id=user.public_id,
                device_id=device_id,
                jti=tokens.jti,
                refresh_hash=self.hasher.hash(tokens.refresh_token),
                expires_at=now + self.session_ttl,
                now=now,
            )

            user.last_login_at = now
            await self.uow.users.update(user)

            await self.uow.commit()

            return Return.ok(
                LoginResponse(
                    access_token=tokens.access_token,
                    refresh_token=tokens.refresh_token,
                    device_id=device_id,
                    user=UserSummary(
                        id=user.public_id,
                        email=user.email,
                        full_name=user.full_name,
                        role=UserRole(user.role).value,
                    ),
                )
            )
