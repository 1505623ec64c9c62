"""Checkout: turns the cart into a placed order.

The steps run strictly in order and stop at the first failure:

    1. refuse an empty cart and freeze its lines into an order draft
    2. notify the seller of that draft (at least one channel must deliver)
    3. store the same draft
    4. take the ordered lines out of the cart

Products added to the cart while steps 2 and 3 are in flight stay in it.
A failure before step 4 leaves the cart exactly as it was so the shopper can
try again. The seller may therefore hear about an order that was never
stored; that is accepted.
"""

import re
from collections.abc import Iterable
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal

import structlog
from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String, Text

from identity.session.state import SessionState
from identity.shared.email import check_email_address
from notifications.seller.notifier import OrderContext, SellerNotifierPort
from ordering.cart.cart import line_total
from ordering.cart.engine import CartEngine
from ordering.domain import ordering
from ordering.order.book import OrderBook
from ordering.order.order import Order, OrderDraft, PaymentMethod
from shared.errors import NotificationFailed, SessionRequired

logger = structlog.get_logger(__name__)

_CENTS = Decimal("0.01")


def format_amount(amount: Decimal) -> str:
    return f"${amount.quantize(_CENTS, rounding=ROUND_HALF_UP)}"


def order_reference(moment: datetime) -> str:
    """Human-facing reference shared with the seller, e.g. ORD-1718000000000."""
    return f"ORD-{int(moment.timestamp()) * 1000 + moment.microsecond // 1000}"


def render_order_summary(lines: Iterable[dict], total: Decimal) -> str:
    """One "name (xN) - $amount" row per cart line snapshot, then the total."""
    rows = [
        f"{line['name']} (x{line['quantity']}) - {format_amount(line_total(line['price'], line['quantity']))}"
        for line in lines
    ]
    return "\n".join(rows) + f"\n\nTotal: {format_amount(total)}"


@ordering.value_object
class CheckoutForm:
    """Contact and payment details entered at checkout."""

    customer_name = String(required=True, max_length=100)
    customer_email = String(required=True, max_length=254)
    customer_phone = String(required=True, max_length=20)
    delivery_address = Text(required=True)
    payment_method = String(choices=PaymentMethod, default=PaymentMethod.COD.value)

    @invariant.post
    def name_must_be_complete(self):
        if len((self.customer_name or "").strip()) < 2:
            raise ValidationError({"customer_name": ["Name must be at least 2 characters."]})

    @invariant.post
    def email_must_be_valid(self):
        try:
            check_email_address(self.customer_email or "")
        except ValueError:
            raise ValidationError({"customer_email": ["Please enter a valid email."]}) from None

    @invariant.post
    def phone_must_be_complete(self):
        if len(re.sub(r"\s", "", self.customer_phone or "")) < 10:
            raise ValidationError({"customer_phone": ["Please enter a valid phone number."]})

    @invariant.post
    def address_must_be_complete(self):
        if len((self.delivery_address or "").strip()) < 10:
            raise ValidationError({"delivery_address": ["Address must be at least 10 characters."]})


class Checkout:
    def __init__(
        self,
        cart: CartEngine,
        orders: OrderBook,
        session: SessionState,
        notifier: SellerNotifierPort,
    ) -> None:
        self._cart = cart
        self._orders = orders
        self._session = session
        self._notifier = notifier

    async def place_order(self, form: CheckoutForm) -> Order:
        cart = self._cart.cart
        if not cart.items:
            raise ValidationError({"cart": ["Your cart is empty"]})
        if not self._session.is_authenticated:
            raise SessionRequired("place an order")

        placed_at = datetime.now(UTC)
        reference = order_reference(placed_at)

        # Frozen before any await; the seller, the store and the cart all see these lines
        draft = OrderDraft.from_cart(
            cart,
            customer_name=form.customer_name,
            customer_email=form.customer_email,
            customer_phone=form.customer_phone,
            delivery_address=form.delivery_address,
            payment_method=form.payment_method,
            user_id=str(self._session.principal.user_id),
            order_date=placed_at,
        )
        lines = draft.lines

        context = OrderContext(
            order_reference=reference,
            customer_name=form.customer_name,
            customer_email=form.customer_email,
            customer_phone=form.customer_phone,
            delivery_address=form.delivery_address,
            order_summary=render_order_summary(lines, draft.amount),
        )
        result = await self._notifier.notify(context)
        if not result.delivered:
            logger.warning("Checkout stopped: seller was not notified", order_reference=reference)
            raise NotificationFailed(f"No notification channel delivered {reference}")

        order = await self._orders.add_order(draft)

        self._cart.settle(lines)
        logger.info("Order placed", order_reference=reference, order_id=str(order.id), total=str(draft.amount))
        return order
