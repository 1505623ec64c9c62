"""Domain events for the Order aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A shopper's checkout was stored as a new order."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier()
    customer_email = String(required=True)
    total = Float(required=True)
    item_count = Integer(required=True)
    order_date = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderShipmentToggled:
    __version__ = 1

    order_id = Identifier(required=True)
    shipped = Boolean(required=True)
