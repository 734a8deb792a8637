"""Order record — an immutable snapshot of a completed checkout.

Everything on an order is fixed when it is created except ``status``, which
an external actor (back office, courier integration) may change at any time.

Status values: pending, confirmed, processing, shipped, delivered, cancelled.
New orders start as pending. No transition order is enforced.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ordering.cart.cart import CartLine
from ordering.checkout.details import CustomerInfo, DeliveryInfo, PaymentInfo


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    OrderStatus.PENDING: "Awaiting confirmation",
    OrderStatus.CONFIRMED: "Confirmed",
    OrderStatus.PROCESSING: "Processing",
    OrderStatus.SHIPPED: "Shipped",
    OrderStatus.DELIVERED: "Delivered",
    OrderStatus.CANCELLED: "Cancelled",
}


class OrderDraft(BaseModel):
    """What checkout hands to the ledger: the cart snapshot and the customer's choices."""

    model_config = ConfigDict(frozen=True)

    items: tuple[CartLine, ...] = Field(min_length=1)
    customer_info: CustomerInfo
    delivery_info: DeliveryInfo
    payment_info: PaymentInfo
    total_amount: int = Field(ge=0)
    discount: int = Field(default=0, ge=0)

    @property
    def final_amount(self) -> int:
        return self.total_amount - self.discount + self.delivery_info.cost


class Order(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    items: tuple[CartLine, ...]
    customer_info: CustomerInfo
    delivery_info: DeliveryInfo
    payment_info: PaymentInfo
    total_amount: int
    discount: int
    final_amount: int
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime
    estimated_delivery: datetime | None = None

    @property
    def total_items(self) -> int:
        return sum(line.quantity for line in self.items)
