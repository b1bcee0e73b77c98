from abc import ABC, abstractmethod
from typing import Any, Dict

from authcore.libs.result import Result
from authcore.domain.entities import TokenKind


class ITokenCodec(ABC):
    """Signs and verifies access/refresh tokens"""

    @abstractmethod
    def issue(self, kind: TokenKind, claims: Dict[str, Any]) -> str:
        """Sign `claims` with the secret and TTL of `kind`"""
        pass

    @abstractmethod
    def verify(self, kind: TokenKind, token: str) -> Result[Dict[str, Any]]:
        """
        Decode and validate a token of the expected kind.

        Bad signature, expiry and a `typ` claim that does not match `kind`
        all yield Error("INVALID_TOKEN").
        """
        pass
