from dataclasses import dataclass


@dataclass(frozen=True)
class DeliveryReceipt:
    """Outcome of handing one message to a channel."""

    channel: str
    delivered: bool
    message_id: str | None = None
    error: str | None = None
