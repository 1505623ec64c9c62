"""Cart engine: the device's cart, persisted through the local key-value store.

Every change is written back immediately under the "cart" key so the cart
survives a restart. A saved cart that cannot be read is discarded rather than
surfaced as an error.
"""

import json
from decimal import Decimal

import structlog
from protean.exceptions import ValidationError

from ordering.cart.cart import Cart, CartItem
from shared.storage import KeyValueStorePort

logger = structlog.get_logger(__name__)

CART_KEY = "cart"


class CartEngine:
    def __init__(self, local_store: KeyValueStorePort) -> None:
        self._store = local_store
        self._cart = Cart()

    @property
    def cart(self) -> Cart:
        return self._cart

    @property
    def items(self) -> list[CartItem]:
        return list(self._cart.items)

    def restore(self) -> Cart:
        """Load the saved cart, falling back to an empty one if it is missing or malformed."""
        raw = self._store.get(CART_KEY)
        if raw is None:
            self._cart = Cart()
            return self._cart

        try:
            lines = json.loads(raw)
            if not isinstance(lines, list):
                raise ValueError("Saved cart is not a list of lines")
            self._cart = Cart.from_snapshot(lines)
        except (ValueError, TypeError, KeyError, ValidationError) as exc:
            logger.warning("Discarding unreadable saved cart", error=str(exc))
            self._cart = Cart()
            self._store.remove(CART_KEY)
            return self._cart

        logger.info("Cart restored", line_count=len(self._cart.items))
        return self._cart

    def add_to_cart(self, product, quantity: int = 1) -> CartItem:
        item = self._cart.add(product, quantity)
        self._persist()
        logger.info("Added to cart", product_id=str(product.id), quantity=quantity, line_quantity=item.quantity)
        return item

    def remove_from_cart(self, product_id) -> bool:
        removed = self._cart.remove(product_id)
        if removed:
            self._persist()
            logger.info("Removed from cart", product_id=str(product_id))
        return removed

    def clear_cart(self) -> None:
        self._cart.clear()
        self._store.remove(CART_KEY)

    def settle(self, lines: list[dict]) -> None:
        """Remove what was just ordered, keeping anything added meanwhile."""
        self._cart.deduct(lines)
        if self._cart.items:
            self._persist()
        else:
            self._store.remove(CART_KEY)
        logger.info("Ordered lines removed from cart", remaining=len(self._cart.items))

    def get_cart_total(self) -> Decimal:
        return self._cart.total

    def _persist(self) -> None:
        self._store.set(CART_KEY, json.dumps(self._cart.snapshot()))
