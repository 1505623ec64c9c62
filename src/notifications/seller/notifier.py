"""Seller notifier: tells the seller about a new order over email and WhatsApp.

Checkout only proceeds when at least one channel delivered. A channel that
raises is logged and counted as not delivered; it does not stop the other.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

import structlog

from notifications.channel.email_port import EmailPort
from notifications.channel.whatsapp_port import WhatsAppPort
from notifications.templates import NEW_ORDER, get_template

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class OrderContext:
    order_reference: str
    customer_name: str
    customer_email: str
    customer_phone: str
    delivery_address: str
    order_summary: str


@dataclass(frozen=True)
class NotificationResult:
    email_sent: bool
    whatsapp_sent: bool

    @property
    def delivered(self) -> bool:
        return self.email_sent or self.whatsapp_sent


class SellerNotifierPort(ABC):
    @abstractmethod
    async def notify(self, context: OrderContext) -> NotificationResult: ...


class SellerNotifier(SellerNotifierPort):
    def __init__(self, email: EmailPort, whatsapp: WhatsAppPort, seller_email: str, seller_whatsapp: str) -> None:
        self.email = email
        self.whatsapp = whatsapp
        self.seller_email = seller_email
        self.seller_whatsapp = seller_whatsapp

    async def notify(self, context: OrderContext) -> NotificationResult:
        content = get_template(NEW_ORDER).render(context)

        try:
            email_receipt = self.email.send(
                self.seller_email, content["subject"], content["body"], reply_to=context.customer_email
            )
            email_sent = email_receipt.delivered
        except Exception as exc:
            logger.error("Seller email raised", order_reference=context.order_reference, error=str(exc))
            email_sent = False

        try:
            whatsapp_sent = self.whatsapp.send(self.seller_whatsapp, content["text"]).delivered
        except Exception as exc:
            logger.error("Seller WhatsApp message raised", order_reference=context.order_reference, error=str(exc))
            whatsapp_sent = False

        result = NotificationResult(email_sent=email_sent, whatsapp_sent=whatsapp_sent)
        log = logger.info if result.delivered else logger.warning
        log(
            "Seller notified of order",
            order_reference=context.order_reference,
            email_sent=email_sent,
            whatsapp_sent=whatsapp_sent,
        )
        return result
