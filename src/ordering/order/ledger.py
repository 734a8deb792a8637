"""Order ledger — every placed order, most recent first.

Orders are never deleted. The whole collection is rewritten to the KV store
on each change.
"""

import time
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from pydantic import TypeAdapter

from ordering.domain import logger
from ordering.order.order import Order, OrderDraft, OrderStatus
from shared.exceptions import ValidationError
from shared.kvstore.port import KVStore
from shared.records import load_collection, save_collection

ORDERS_KEY = "uzum-orders"
DELIVERY_WINDOW = timedelta(days=3)

_ORDERS = TypeAdapter(list[Order])


def _utcnow() -> datetime:
    return datetime.now(UTC)


class OrderLedger:
    def __init__(
        self,
        store: KVStore,
        *,
        key: str = ORDERS_KEY,
        delivery_window: timedelta = DELIVERY_WINDOW,
        latency_seconds: float = 0.0,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.store = store
        self.key = key
        self.delivery_window = delivery_window
        self.latency_seconds = latency_seconds
        self._clock = clock
        self._orders: list[Order] = load_collection(store, key, _ORDERS)

    @property
    def orders(self) -> tuple[Order, ...]:
        return tuple(self._orders)

    def create_order(self, draft: OrderDraft) -> str:
        """Record a new pending order and return its id.

        ``latency_seconds`` stands in for the round trip to an order service;
        the call blocks for that long and then always succeeds.
        """
        if self.latency_seconds:
            time.sleep(self.latency_seconds)

        now = self._clock()
        order = Order(
            id=self._next_id(now),
            items=draft.items,
            customer_info=draft.customer_info,
            delivery_info=draft.delivery_info,
            payment_info=draft.payment_info,
            total_amount=draft.total_amount,
            discount=draft.discount,
            final_amount=draft.final_amount,
            status=OrderStatus.PENDING,
            created_at=now,
            estimated_delivery=now + self.delivery_window,
        )

        self._orders.insert(0, order)
        self._save()

        logger.info(
            "Order created",
            order_id=order.id,
            item_count=order.total_items,
            final_amount=order.final_amount,
        )
        return order.id

    def get_order_by_id(self, order_id: str) -> Order | None:
        return next((o for o in self._orders if o.id == order_id), None)

    def orders_for_customer(self, email: str) -> tuple[Order, ...]:
        return tuple(o for o in self._orders if o.customer_info.email == email)

    def update_order_status(self, order_id: str, status: OrderStatus | str) -> Order | None:
        """Set an order's status. Any status may follow any other.

        Returns the updated order, or None when no order has ``order_id``.
        """
        try:
            status = OrderStatus(status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status: {status!r}"]}) from None

        index = next((i for i, o in enumerate(self._orders) if o.id == order_id), None)
        if index is None:
            return None

        previous = self._orders[index].status
        order = self._orders[index].model_copy(update={"status": status})
        self._orders[index] = order
        self._save()

        logger.info(
            "Order status updated",
            order_id=order_id,
            previous_status=previous.value,
            status=status.value,
        )
        return order

    def _next_id(self, now: datetime) -> str:
        # Millisecond timestamp, bumped past the newest id on collision
        candidate = int(now.timestamp() * 1000)
        latest = max((int(o.id) for o in self._orders if o.id.isdecimal()), default=0)
        return str(max(candidate, latest + 1))

    def _save(self) -> None:
        save_collection(self.store, self.key, _ORDERS, self._orders)
