"""Order book: the in-memory mirror of the shared "orders" collection.

Writes go to the object store first and are reflected locally only once the
store accepts them, so a failed write leaves the mirror untouched. Orders
placed from other devices appear after `refresh()`.
"""

from collections.abc import Callable

import structlog
from protean.exceptions import ValidationError

from identity.session.principal import Principal
from identity.session.state import SessionState, SessionStatus
from ordering.order.order import Order, OrderDraft
from shared.errors import SessionRequired
from shared.storage import ObjectStorePort, OrderSpec

logger = structlog.get_logger(__name__)

ORDERS = "orders"


def _newest_first(orders: list[Order]) -> list[Order]:
    return sorted(orders, key=lambda order: order.order_date, reverse=True)


class OrderBook:
    def __init__(self, store: ObjectStorePort, session: SessionState) -> None:
        self._store = store
        self._session = session
        self._orders: list[Order] = []
        self._mine: list[Order] = []
        self._unsubscribe: Callable[[], None] | None = session.subscribe(self._on_session_change)

    async def load(self) -> list[Order]:
        records = await self._store.list_all(ORDERS, order_by=OrderSpec("order_date", descending=True))

        orders = []
        for record in records:
            try:
                orders.append(Order.from_record(record))
            except (ValidationError, KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping unreadable order record", order_id=record.get("id"), error=str(exc))

        self._orders = orders
        self._mine = self._orders_of(self._session.principal)
        logger.info("Orders loaded", order_count=len(orders))
        return self.list_orders()

    async def refresh(self) -> list[Order]:
        return await self.load()

    async def add_order(self, draft: OrderDraft) -> Order:
        """Store a draft as a new order and mirror it locally."""
        if not self._session.is_authenticated:
            raise SessionRequired("place an order")

        order_id = await self._store.insert(ORDERS, draft.to_record())
        order = Order.from_draft(draft, order_id)

        self._orders.append(order)
        principal = self._session.principal
        if principal is not None and order.user_id and str(order.user_id) == str(principal.user_id):
            self._mine.append(order)

        logger.info("Order stored", order_id=order_id, user_id=order.user_id, total=order.total)
        return order

    async def toggle_order_shipped(self, order_id: str) -> Order | None:
        """Flip an order's shipped flag. Unknown ids are ignored."""
        order = self.get(order_id)
        if order is None:
            logger.info("Ignoring shipment toggle for unknown order", order_id=order_id)
            return None

        shipped = not order.shipped
        await self._store.update(ORDERS, str(order.id), {"shipped": shipped})
        order.mark_shipped(shipped)

        logger.info("Order shipment toggled", order_id=str(order.id), shipped=shipped)
        return order

    def list_orders(self) -> list[Order]:
        return _newest_first(self._orders)

    def list_orders_for(self, principal: Principal | None) -> list[Order]:
        return _newest_first(self._orders_of(principal))

    def my_orders(self) -> list[Order]:
        return _newest_first(self._mine)

    def get(self, order_id: str) -> Order | None:
        return next((order for order in self._orders if str(order.id) == str(order_id)), None)

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _orders_of(self, principal: Principal | None) -> list[Order]:
        if principal is None:
            return []
        return [order for order in self._orders if order.user_id and str(order.user_id) == str(principal.user_id)]

    def _on_session_change(self, status: SessionStatus, principal: Principal | None) -> None:
        self._mine = self._orders_of(principal if status == SessionStatus.AUTHENTICATED else None)
