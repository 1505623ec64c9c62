"""Fake WhatsApp adapter: builds the click-to-chat link and records it."""

import re
from urllib.parse import quote
from uuid import uuid4

from notifications.channel import NotificationChannel
from notifications.channel.receipt import DeliveryReceipt
from notifications.channel.whatsapp_port import WhatsAppPort


def click_to_chat_link(phone: str, text: str) -> str:
    """wa.me link for a phone number; the number keeps only its digits."""
    digits = re.sub(r"\D", "", phone)
    return f"https://wa.me/{digits}?text={quote(text)}"


class FakeWhatsAppAdapter(WhatsAppPort):
    def __init__(self):
        self.sent_messages: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "WhatsApp delivery failed"

    def configure(self, should_succeed: bool = True, failure_reason: str = "WhatsApp delivery failed"):
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def send(self, phone: str, text: str) -> DeliveryReceipt:
        if not self.should_succeed:
            return DeliveryReceipt(
                channel=NotificationChannel.WHATSAPP.value, delivered=False, error=self.failure_reason
            )
        if not re.sub(r"\D", "", phone or ""):
            return DeliveryReceipt(
                channel=NotificationChannel.WHATSAPP.value, delivered=False, error="No phone number to message"
            )

        message_id = f"wa-{uuid4().hex[:12]}"
        self.sent_messages.append(
            {
                "message_id": message_id,
                "phone": phone,
                "text": text,
                "link": click_to_chat_link(phone, text),
            }
        )
        return DeliveryReceipt(channel=NotificationChannel.WHATSAPP.value, delivered=True, message_id=message_id)

    def reset(self):
        self.sent_messages.clear()
        self.should_succeed = True
        self.failure_reason = "WhatsApp delivery failed"
