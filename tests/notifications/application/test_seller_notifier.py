"""Tests for SellerNotifier: one order announced on both channels."""

import asyncio
from unittest.mock import MagicMock

import pytest
from notifications.channel.fake_email import FakeEmailAdapter
from notifications.channel.fake_whatsapp import FakeWhatsAppAdapter
from notifications.seller import NotificationResult, OrderContext, SellerNotifier


@pytest.fixture
def context():
    return OrderContext(
        order_reference="ORD-1717171717000",
        customer_name="Asha Verma",
        customer_email="asha@example.com",
        customer_phone="+91 98765 43210",
        delivery_address="12 Park Street, Kolkata 700016",
        order_summary="HDMI Cable (x2) - $20.00\n\nTotal: $20.00",
    )


@pytest.fixture
def email():
    return FakeEmailAdapter()


@pytest.fixture
def whatsapp():
    return FakeWhatsAppAdapter()


@pytest.fixture
def notifier(email, whatsapp):
    return SellerNotifier(email, whatsapp, "seller@shop.test", "+15550001111")


class TestNotify:
    def test_both_channels_deliver(self, notifier, email, whatsapp, context):
        result = asyncio.run(notifier.notify(context))

        assert result == NotificationResult(email_sent=True, whatsapp_sent=True)
        assert result.delivered is True
        assert email.outbox[0]["to"] == "seller@shop.test"
        assert email.outbox[0]["reply_to"] == "asha@example.com"
        assert whatsapp.sent_messages[0]["phone"] == "+15550001111"

    def test_summary_reaches_the_seller(self, notifier, email, whatsapp, context):
        asyncio.run(notifier.notify(context))

        assert "HDMI Cable (x2) - $20.00" in email.outbox[0]["body"]
        assert "HDMI Cable (x2) - $20.00" in whatsapp.sent_messages[0]["text"]

    def test_email_only(self, notifier, whatsapp, context):
        whatsapp.configure(should_succeed=False)

        result = asyncio.run(notifier.notify(context))

        assert result == NotificationResult(email_sent=True, whatsapp_sent=False)
        assert result.delivered is True

    def test_whatsapp_only(self, notifier, email, context):
        email.configure(should_succeed=False)

        result = asyncio.run(notifier.notify(context))

        assert result.email_sent is False
        assert result.delivered is True

    def test_nothing_delivered(self, notifier, email, whatsapp, context):
        email.configure(should_succeed=False)
        whatsapp.configure(should_succeed=False)

        result = asyncio.run(notifier.notify(context))

        assert result.delivered is False

    def test_raising_channel_counts_as_not_sent(self, whatsapp, context):
        broken = MagicMock()
        broken.send.side_effect = RuntimeError("socket closed")
        notifier = SellerNotifier(broken, whatsapp, "seller@shop.test", "+15550001111")

        result = asyncio.run(notifier.notify(context))

        assert result == NotificationResult(email_sent=False, whatsapp_sent=True)

    def test_missing_seller_number(self, email, whatsapp, context):
        notifier = SellerNotifier(email, whatsapp, "seller@shop.test", "")

        result = asyncio.run(notifier.notify(context))

        assert result == NotificationResult(email_sent=True, whatsapp_sent=False)
