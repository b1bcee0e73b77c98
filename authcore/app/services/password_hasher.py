from abc import ABC, abstractmethod


class IPasswordHasher(ABC):
    """One-way hash used for passwords and refresh-token fingerprints"""

    @abstractmethod
    def hash(self, secret: str) -> str:
        pass

    @abstractmethod
    def verify(self, secret: str, hashed: str) -> bool:
        """Constant-time comparison of `secret` against a stored hash"""
        pass
