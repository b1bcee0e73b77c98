import base64
import hashlib

import bcrypt

from authcore.app.services.password_hasher import IPasswordHasher


class BcryptPasswordHasher(IPasswordHasher):
    """
    bcrypt over a SHA-256 pre-hash.

    bcrypt only reads the first 72 bytes of its input. Refresh tokens are
    JWTs whose leading bytes (header plus the start of the payload) are the
    same for every token a user gets, so hashing them raw would let a rotated
    token still match. The base64 SHA-256 digest is 44 bytes and covers the
    whole input.
    """

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    @staticmethod
    def _prehash(secret: str) -> bytes:
        return base64.b64encode(hashlib.sha256(secret.encode("utf-8")).digest())

    def hash(self, secret: str) -> str:
        hashed = bcrypt.hashpw(self._prehash(secret), bcrypt.gensalt(self.rounds))
        return hashed.decode("utf-8")

    def verify(self, secret: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(self._prehash(secret), hashed.encode("utf-8"))
        except (ValueError, AttributeError):
            # Malformed stored hash
            return False
