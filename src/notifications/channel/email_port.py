"""Email channel port."""

from abc import ABC, abstractmethod

from notifications.channel.receipt import DeliveryReceipt


class EmailPort(ABC):
    @abstractmethod
    def send(self, to: str, subject: str, body: str, reply_to: str | None = None) -> DeliveryReceipt:
        """Send one plain-text email. Failures are reported in the receipt, not raised."""
        ...
