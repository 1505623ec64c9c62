"""WhatsApp channel port: short text messages to a phone number."""

from abc import ABC, abstractmethod

from notifications.channel.receipt import DeliveryReceipt


class WhatsAppPort(ABC):
    @abstractmethod
    def send(self, phone: str, text: str) -> DeliveryReceipt:
        """Send one message. Failures are reported in the receipt, not raised."""
        ...
