"""
Refresh Token Use Case

Rotates a device session's refresh token and detects reuse of superseded
tokens.
"""

import logging
from datetime import timedelta

from authcore.libs.result import Error, Result, Return
from authcore.app.services.password_hasher import IPasswordHasher
from authcore.app.services.token_codec import ITokenCodec
from authcore.app.services.unit_of_work import UnitOfWork
from authcore.domain.base import utcnow
from authcore.domain.entities import TokenKind
from .dtos import RefreshTokenResponse
from .token_pair import issue_token_pair

logger = logging.getLogger(__name__)


class RefreshTokenUseCase:
    """
    Use case for refreshing tokens with rotation and reuse detection.

    Checks run in order, first failure wins:
    1. Token signature/expiry/typ            -> INVALID_TOKEN (no storage access)
    2. Token device_id != requested device   -> INVALID_SESSION, nothing revoked
    3. Session missing or revoked            -> INVALID_SESSION
    4. Session expired                       -> SESSION_EXPIRED
    5. Token does not match refresh_hash     -> revoke session, SESSION_COMPROMISED
    6. Rotate: new pair, new hash, sliding expiry

    The rotation write is a compare-and-set on the hash read in step 5. Of
    two concurrent refreshes presenting the same token exactly one rotates;
    the other sees the hash already replaced and is handled like step 5.

    Step 2 means a refresh token only ever acts on the session of the device
    it was issued to. Presenting it for another device never looks up or
    revokes that device's session.
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

    async def _revoke_compromised(self, user_id: str, device_id: str) -> Result:
        await self.uow.sessions.revoke(user_id, device_id, utcnow())
        await self.uow.commit()
        logger.warning(
            f"Refresh token reuse detected for user {user_id} device {device_id}, "
            "session revoked"
        )
        return Return.err(Error("SESSION_COMPROMISED", "session_compromised"))

    async def execute(
        self, refresh_token: str, device_id: str
    ) -> Result[RefreshTokenResponse]:
        """
        Execute refresh token use case.

        Args:
            refresh_token: The refresh token to verify and rotate
            device_id: Device the session belongs to

        Returns:
            Result with RefreshTokenResponse containing new tokens, or Error
        """
        verified = self.codec.verify(TokenKind.refresh, refresh_token)
        if verified.is_err():
            return Return.err(verified.error)

        claims = verified.value
        user_id = claims["sub"]

        # A token minted for another device never touches this device's session
        if claims.get("device_id") != device_id:
            return Return.err(Error("INVALID_SESSION", "invalid_session"))

        async with self.uow:
            session = await self.uow.sessions.get_by_user_and_device(user_id, device_id)
            if session is None or session.revoked:
                return Return.err(Error("INVALID_SESSION", "invalid_session"))

            now = utcnow()
            if session.expires_at < now:
                return Return.err(Error("SESSION_EXPIRED", "session_expired"))

            if not self.hasher.verify(refresh_token, session.refresh_hash):
                return await self._revoke_compromised(user_id, device_id)

            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("INVALID_SESSION", "invalid_session"))

            tokens = issue_token_pair(self.codec, user, device_id)

            rotated = await self.uow.sessions.rotate(
                user_id=user_id,
                device_id=device_id,
                expected_hash=session.refresh_hash,
                jti=tokens.jti,
                refresh_hash=self.hasher.hash(tokens.refresh_token),
                expires_at=now + self.session_ttl,
                now=now,
            )
            if not rotated:
                return await self._revoke_compromised(user_id, device_id)

            await self.uow.commit()

            return Return.ok(
                RefreshTokenResponse(
                    access_token=tokens.access_token,
                    refresh_token=tokens.refresh_token,
                )
            )
