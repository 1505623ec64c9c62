"""Fake email adapter: keeps an outbox instead of sending."""

from uuid import uuid4

from notifications.channel import NotificationChannel
from notifications.channel.email_port import EmailPort
from notifications.channel.receipt import DeliveryReceipt


class FakeEmailAdapter(EmailPort):
    def __init__(self):
        self.outbox: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Email delivery failed"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Email delivery failed"):
        """Configure the fake adapter behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def send(self, to: str, subject: str, body: str, reply_to: str | None = None) -> DeliveryReceipt:
        if not self.should_succeed:
            return DeliveryReceipt(channel=NotificationChannel.EMAIL.value, delivered=False, error=self.failure_reason)

        message_id = f"email-{uuid4().hex[:12]}"
        self.outbox.append(
            {
                "message_id": message_id,
                "to": to,
                "subject": subject,
                "body": body,
                "reply_to": reply_to,
            }
        )
        return DeliveryReceipt(channel=NotificationChannel.EMAIL.value, delivered=True, message_id=message_id)

    def reset(self):
        self.outbox.clear()
        self.should_succeed = True
        self.failure_reason = "Email delivery failed"
