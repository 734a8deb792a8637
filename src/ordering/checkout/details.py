"""Checkout details — customer contact, delivery and payment information.

Delivery and payment are tagged variants: the ``type`` / ``method`` field
selects which other fields are present. The ``*Form`` models hold the
in-progress input of the checkout wizard; the variants are what an order
records once that input has been validated.
"""

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class DeliveryType(Enum):
    COURIER = "courier"
    PICKUP = "pickup"
    POST = "post"


class PaymentMethod(Enum):
    CARD = "card"
    CASH = "cash"
    ONLINE = "online"


# Delivery price depends only on the chosen type
DELIVERY_COSTS = {
    DeliveryType.COURIER: 15_000,
    DeliveryType.PICKUP: 0,
    DeliveryType.POST: 8_000,
}

PICKUP_POINTS = (
    "Mega Planet mall, 44 Oybek St",
    "Next mall, 1 Shakhrisabz St",
    "Compass mall, 174 Babur St",
    "Chilanzar store, 1 Katartal St",
)


class CustomerInfo(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""


# ---------------------------------------------------------------------------
# Delivery
# ---------------------------------------------------------------------------
class CourierDelivery(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["courier"] = "courier"
    address: str = Field(min_length=1)
    city: str = Field(min_length=1)
    postal_code: str = ""
    cost: int = Field(ge=0)


class PickupDelivery(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["pickup"] = "pickup"
    pickup_point: str = Field(min_length=1)
    cost: int = Field(ge=0)


class PostDelivery(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["post"] = "post"
    address: str = Field(min_length=1)
    city: str = Field(min_length=1)
    postal_code: str = Field(min_length=1)
    cost: int = Field(ge=0)


DeliveryInfo = Annotated[CourierDelivery | PickupDelivery | PostDelivery, Field(discriminator="type")]


class DeliveryForm(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: DeliveryType = DeliveryType.COURIER
    address: str = ""
    city: str = ""
    postal_code: str = ""
    pickup_point: str = ""


# ---------------------------------------------------------------------------
# Payment
# ---------------------------------------------------------------------------
class CardPayment(BaseModel):
    model_config = ConfigDict(frozen=True)

    method: Literal["card"] = "card"
    card_number: str = Field(pattern=r"^\d{16}$")
    card_holder: str = Field(min_length=1)
    expiry_date: str = Field(pattern=r"^\d{2}/\d{2}$")
    cvv: str = Field(pattern=r"^\d{3}$")


class CashPayment(BaseModel):
    model_config = ConfigDict(frozen=True)

    method: Literal["cash"] = "cash"


class OnlinePayment(BaseModel):
    model_config = ConfigDict(frozen=True)

    method: Literal["online"] = "online"


PaymentInfo = Annotated[CardPayment | CashPayment | OnlinePayment, Field(discriminator="method")]


class PaymentForm(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    method: PaymentMethod = PaymentMethod.CARD
    card_number: str = ""
    card_holder: str = ""
    expiry_date: str = ""
    cvv: str = ""
