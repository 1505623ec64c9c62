"""Seller notification channels.

Both channels are simulated: the fake adapters record what would have been
delivered. The storefront wires one adapter per channel into its
`SellerNotifier`.
"""

from enum import Enum


class NotificationChannel(Enum):
    EMAIL = "Email"
    WHATSAPP = "WhatsApp"
