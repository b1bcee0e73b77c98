import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, Dict

from jose import JWTError, jwt

from authcore.app.services.token_codec import ITokenCodec
from authcore.domain.entities import TokenKind
from authcore.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenCodecConfig:
    access_secret: str
    refresh_secret: str
    access_ttl: timedelta = timedelta(minutes=15)
    refresh_ttl: timedelta = timedelta(days=30)
    algorithm: str = "HS256"

    @classmethod
    def from_application_config(cls, config) -> "TokenCodecConfig":
        return cls(
            access_secret=config.ACCESS_TOKEN_SECRET,
            refresh_secret=config.REFRESH_TOKEN_SECRET,
            access_ttl=timedelta(minutes=config.ACCESS_TOKEN_TTL_MINUTES),
            refresh_ttl=timedelta(days=config.REFRESH_TOKEN_TTL_DAYS),
            algorithm=config.JWT_ALGORITHM,
        )


class JwtTokenCodec(ITokenCodec):
    """
    HS256 JWT codec with one secret and TTL per token kind.

    Every token carries a `typ` claim; verify() rejects a token whose `typ`
    differs from the expected kind, so an access token can never be
    presented as a refresh token even though both are validly signed.
    """

    def __init__(self, config: TokenCodecConfig):
        self.config = config

    def _secret(self, kind: TokenKind) -> str:
        if kind == TokenKind.access:
            return self.config.access_secret
        return self.config.refresh_secret

    def _ttl(self, kind: TokenKind) -> timedelta:
        if kind == TokenKind.access:
            return self.config.access_ttl
        return self.config.refresh_ttl

    def issue(self, kind: TokenKind, claims: Dict[str, Any]) -> str:
        now = datetime.now(UTC)
        payload = {
            **claims,
            "typ": kind.value,
            "iat": now,
            "exp": now + self._ttl(kind),
        }
        return jwt.encode(payload, self._secret(kind), algorithm=self.config.algorithm)

    def verify(self, kind: TokenKind, token: str) -> Result[Dict[str, Any]]:
        try:
            payload = jwt.decode(
                token, self._secret(kind), algorithms=[self.config.algorithm]
            )
        except JWTError as exc:
            logger.debug(f"Rejected {kind.value} token: {exc}")
            return Return.err(Error("INVALID_TOKEN", "invalid_or_expired"))

        if payload.get("typ") != kind.value or not payload.get("sub"):
            logger.debug(f"Rejected {kind.value} token: wrong typ or missing sub")
            return Return.err(Error("INVALID_TOKEN", "invalid_or_expired"))

        return Return.ok(payload)
