from abc import ABC, abstractmethod


class EmailDeliveryError(Exception):
    """Outbound email could not be handed to the transport"""


class IEmailSender(ABC):
    """Outbound email transport - application layer"""

    @abstractmethod
    async def send(self, to_address: str, subject: str, html_body: str) -> None:
        """Send one HTML email. Raises EmailDeliveryError on failure."""
        pass
