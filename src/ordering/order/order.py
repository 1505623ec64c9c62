"""Order aggregate: a placed order and the draft it is created from.

An `OrderDraft` is assembled at checkout from the cart and the shopper's
contact details. It has no id. The object store assigns one when the draft is
inserted, and only then does it become an `Order`. After that the only thing
that ever changes on an order is its `shipped` flag.
"""

import json
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, Text

from ordering.cart.cart import line_total
from ordering.domain import ordering
from ordering.order.events import OrderPlaced, OrderShipmentToggled


class PaymentMethod(Enum):
    COD = "COD"


PAYMENT_METHOD_LABELS = {PaymentMethod.COD: "Cash on Delivery"}


def parse_timestamp(value) -> datetime:
    moment = value if isinstance(value, datetime) else datetime.fromisoformat(str(value))
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment


def _lines_total(lines: list[dict]) -> Decimal:
    return sum((line_total(line["price"], int(line["quantity"])) for line in lines), Decimal("0"))


@ordering.value_object(part_of="Order")
class OrderDraft:
    customer_name = String(required=True, max_length=100)
    customer_email = String(required=True, max_length=254)
    customer_phone = String(required=True, max_length=20)
    delivery_address = Text(required=True)
    items = Text(required=True)  # JSON list of cart line snapshots, frozen at checkout
    total = Float(required=True, min_value=0.0)
    payment_method = String(choices=PaymentMethod, default=PaymentMethod.COD.value)
    order_date = DateTime(required=True)
    user_id = Identifier()

    @invariant.post
    def must_have_items(self):
        if not self.lines:
            raise ValidationError({"items": ["An order needs at least one item"]})

    @invariant.post
    def total_must_match_items(self):
        # Stored as a float, so compare at float precision
        if self.total != float(_lines_total(self.lines)):
            raise ValidationError({"total": ["Order total must equal the sum of its line totals"]})

    @classmethod
    def from_cart(
        cls,
        cart,
        customer_name: str,
        customer_email: str,
        customer_phone: str,
        delivery_address: str,
        payment_method: str = PaymentMethod.COD.value,
        user_id: str | None = None,
        order_date: datetime | None = None,
    ) -> "OrderDraft":
        return cls(
            customer_name=customer_name,
            customer_email=customer_email,
            customer_phone=customer_phone,
            delivery_address=delivery_address,
            items=json.dumps(cart.snapshot()),
            total=float(cart.total),
            payment_method=payment_method,
            order_date=order_date or datetime.now(UTC),
            user_id=user_id,
        )

    @property
    def lines(self) -> list[dict]:
        try:
            lines = json.loads(self.items) if self.items else []
        except (json.JSONDecodeError, TypeError):
            raise ValidationError({"items": ["Order items must be a JSON list"]}) from None
        if not isinstance(lines, list):
            raise ValidationError({"items": ["Order items must be a JSON list"]})
        return lines

    @property
    def amount(self) -> Decimal:
        """Exact sum of the frozen lines."""
        return _lines_total(self.lines)

    def to_record(self) -> dict:
        """Stored shape of a new order, without an id."""
        return {
            "customer_name": self.customer_name,
            "customer_email": self.customer_email,
            "customer_phone": self.customer_phone,
            "delivery_address": self.delivery_address,
            "items": self.lines,
            "total": self.total,
            "payment_method": self.payment_method,
            "order_date": self.order_date.isoformat(),
            "shipped": False,
            "user_id": str(self.user_id) if self.user_id else None,
        }


@ordering.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    image = String(max_length=2048)
    price = Float(required=True, min_value=0.0)
    description = Text()
    category = String(max_length=50)
    quantity = Integer(required=True, min_value=1)

    @property
    def line_total(self) -> Decimal:
        return line_total(self.price, self.quantity)


@ordering.aggregate
class Order:
    customer_name = String(required=True, max_length=100)
    customer_email = String(required=True, max_length=254)
    customer_phone = String(required=True, max_length=20)
    delivery_address = Text(required=True)
    items = HasMany(OrderItem)
    total = Float(required=True, min_value=0.0)
    payment_method = String(choices=PaymentMethod, default=PaymentMethod.COD.value)
    order_date = DateTime(required=True)
    shipped = Boolean(default=False)
    user_id = Identifier()

    @classmethod
    def _build(cls, order_id: str, fields: dict, lines: list[dict], shipped: bool) -> "Order":
        order = cls(
            id=str(order_id),
            customer_name=fields["customer_name"],
            customer_email=fields["customer_email"],
            customer_phone=fields["customer_phone"],
            delivery_address=fields["delivery_address"],
            total=fields["total"],
            payment_method=fields.get("payment_method") or PaymentMethod.COD.value,
            order_date=parse_timestamp(fields["order_date"]),
            shipped=bool(shipped),
            user_id=fields.get("user_id"),
        )
        for line in lines:
            order.add_items(
                OrderItem(
                    product_id=str(line["id"]),
                    name=line["name"],
                    image=line.get("image"),
                    price=line["price"],
                    description=line.get("description"),
                    category=line.get("category"),
                    quantity=line["quantity"],
                )
            )
        return order

    @classmethod
    def from_draft(cls, draft: OrderDraft, order_id: str) -> "Order":
        """The order a draft became once the store assigned it `order_id`."""
        record = draft.to_record()
        order = cls._build(order_id, record, record["items"], shipped=False)
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=order.user_id,
                customer_email=order.customer_email,
                total=order.total,
                item_count=sum(item.quantity for item in order.items),
                order_date=order.order_date,
            )
        )
        return order

    @classmethod
    def from_record(cls, record: dict) -> "Order":
        items = record.get("items") or []
        if isinstance(items, str):
            items = json.loads(items)
        return cls._build(record["id"], record, items, shipped=record.get("shipped", False))

    def mark_shipped(self, shipped: bool) -> None:
        self.shipped = shipped
        self.raise_(OrderShipmentToggled(order_id=str(self.id), shipped=shipped))
