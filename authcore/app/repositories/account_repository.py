from abc import ABC, abstractmethod

from authcore.domain.entities import Account


class IAccountRepository(ABC):
    """Account repository interface - application layer"""

    @abstractmethod
    async def create(self, account: Account) -> Account:
        """Create a new account"""
        pass
