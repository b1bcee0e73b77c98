from abc import ABC, abstractmethod


class IEmailSender(ABC):
    """Outbound activation email"""

    @abstractmethod
    async def send_activation(self, email: str, token: str, name: str) -> bool:
        """Deliver the activation link. Returns False when delivery failed."""
        pass
