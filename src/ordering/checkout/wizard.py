"""Checkout wizard — three validation-gated steps that end in an order.

    CONTACT_INFO -> DELIVERY -> PAYMENT -> place_order()

``next()`` only advances when the active step validates; on failure the
field errors are left on ``wizard.errors`` and the step does not change.
``prev()`` always goes back one step without validating. ``place_order()``
is available from the payment step, hands an ``OrderDraft`` to the order
ledger, empties the cart and closes the wizard. Wizard state is never
persisted.
"""

from decimal import ROUND_HALF_UP, Decimal
from enum import IntEnum

from pydantic import BaseModel, ConfigDict

from identity.customer.account import User
from identity.shared.phone import DEFAULT_COUNTRY_CODE, normalize_phone
from ordering.cart.cart import CartLedger
from ordering.checkout.details import (
    DELIVERY_COSTS,
    PICKUP_POINTS,
    CustomerInfo,
    DeliveryForm,
    DeliveryType,
    PaymentForm,
    PaymentMethod,
)
from ordering.checkout.validation import (
    CARD_NUMBER_DIGITS,
    CVV_DIGITS,
    EXPIRY_DIGITS,
    build_delivery_info,
    build_payment_info,
    digit_count,
    format_card_number,
    format_expiry_date,
    validate_customer_info,
    validate_delivery,
    validate_payment,
)
from ordering.domain import logger
from ordering.order.ledger import OrderLedger
from ordering.order.order import OrderDraft
from shared.exceptions import ValidationError

DEFAULT_DISCOUNT_RATE = 0.1


class CheckoutStep(IntEnum):
    CONTACT_INFO = 1
    DELIVERY = 2
    PAYMENT = 3


class OrderTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_amount: int
    discount: int
    delivery_cost: int
    final_amount: int


def compute_discount(total_amount: int, rate: float) -> int:
    """Discount in whole currency units, rounded half up."""
    discount = Decimal(total_amount) * Decimal(str(rate))
    return int(discount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class CheckoutWizard:
    def __init__(
        self,
        cart: CartLedger,
        orders: OrderLedger,
        *,
        user: User | None = None,
        country_code: str = DEFAULT_COUNTRY_CODE,
        discount_rate: float = DEFAULT_DISCOUNT_RATE,
        delivery_costs=DELIVERY_COSTS,
        pickup_points=PICKUP_POINTS,
    ):
        if cart.is_empty:
            raise ValidationError({"cart": ["Your cart is empty"]})

        self.cart = cart
        self.orders = orders
        self.country_code = country_code
        self.discount_rate = discount_rate
        self.delivery_costs = delivery_costs
        self.pickup_points = pickup_points

        self.step = CheckoutStep.CONTACT_INFO
        self.customer_info = CustomerInfo()
        if user is not None:
            self.customer_info = CustomerInfo(
                first_name=user.first_name,
                last_name=user.last_name,
                email=user.email,
                phone=user.phone,
            )
        self.delivery = DeliveryForm()
        self.payment = PaymentForm()
        self.errors: dict[str, list[str]] = {}
        self.order_id: str | None = None

    # -------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------
    @property
    def current_step(self) -> int:
        return int(self.step)

    @property
    def is_closed(self) -> bool:
        return self.order_id is not None

    @property
    def delivery_cost(self) -> int:
        return self.delivery_costs[self.delivery.type]

    @property
    def totals(self) -> OrderTotals:
        total_amount = self.cart.get_total_price()
        discount = compute_discount(total_amount, self.discount_rate)
        return OrderTotals(
            total_amount=total_amount,
            discount=discount,
            delivery_cost=self.delivery_cost,
            final_amount=total_amount - discount + self.delivery_cost,
        )

    # -------------------------------------------------------------------
    # Input
    # -------------------------------------------------------------------
    def update_customer_info(self, **changes) -> CustomerInfo:
        self._ensure_open()
        if "phone" in changes:
            changes["phone"] = normalize_phone(changes["phone"], self.country_code)

        self.customer_info = CustomerInfo.model_validate({**self.customer_info.model_dump(), **changes})
        self._clear_errors(changes)
        return self.customer_info

    def select_delivery_type(self, delivery_type: DeliveryType | str) -> DeliveryForm:
        self._ensure_open()
        self.delivery = self.delivery.model_copy(update={"type": DeliveryType(delivery_type)})
        self.errors = {}
        return self.delivery

    def update_delivery(self, **changes) -> DeliveryForm:
        self._ensure_open()
        self.delivery = DeliveryForm.model_validate({**self.delivery.model_dump(), **changes})
        self._clear_errors(changes)
        return self.delivery

    def select_payment_method(self, method: PaymentMethod | str) -> PaymentForm:
        self._ensure_open()
        self.payment = self.payment.model_copy(update={"method": PaymentMethod(method)})
        self.errors = {}
        return self.payment

    def update_payment(self, **changes) -> PaymentForm:
        """Apply payment input, formatted as typed.

        Edits that would exceed the digit limit of a card field are ignored,
        the same way a masked input refuses the extra keystroke.
        """
        self._ensure_open()
        if "card_number" in changes:
            formatted = format_card_number(changes["card_number"])
            if digit_count(formatted) > CARD_NUMBER_DIGITS:
                del changes["card_number"]
            else:
                changes["card_number"] = formatted
        if "expiry_date" in changes:
            formatted = format_expiry_date(changes["expiry_date"])
            if digit_count(formatted) > EXPIRY_DIGITS:
                del changes["expiry_date"]
            else:
                changes["expiry_date"] = formatted
        if "cvv" in changes:
            digits = "".join(ch for ch in changes["cvv"] if ch.isdigit())
            if len(digits) > CVV_DIGITS:
                del changes["cvv"]
            else:
                changes["cvv"] = digits

        self.payment = PaymentForm.model_validate({**self.payment.model_dump(), **changes})
        self._clear_errors(changes)
        return self.payment

    # -------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------
    def validate_step(self, step: CheckoutStep | None = None) -> dict[str, list[str]]:
        step = self.step if step is None else CheckoutStep(step)
        if step is CheckoutStep.CONTACT_INFO:
            return validate_customer_info(self.customer_info, self.country_code)
        if step is CheckoutStep.DELIVERY:
            return validate_delivery(self.delivery, self.pickup_points)
        return validate_payment(self.payment)

    def next(self) -> bool:
        """Advance one step if the active step validates."""
        self._ensure_open()
        if self.step is CheckoutStep.PAYMENT:
            return False

        self.errors = self.validate_step()
        if self.errors:
            logger.info("Checkout step incomplete", step=self.step.name, fields=sorted(self.errors))
            return False

        self.step = CheckoutStep(self.step + 1)
        return True

    def prev(self) -> bool:
        self._ensure_open()
        if self.step is CheckoutStep.CONTACT_INFO:
            return False

        self.step = CheckoutStep(self.step - 1)
        self.errors = {}
        return True

    def place_order(self) -> str | None:
        """Create the order from the payment step; returns its id, or None with ``errors`` set."""
        self._ensure_open()
        if self.step is not CheckoutStep.PAYMENT:
            self.errors = {"step": ["Complete the contact and delivery steps first"]}
            return None
        if self.cart.is_empty:
            self.errors = {"cart": ["Your cart is empty"]}
            return None

        errors = {}
        for step in CheckoutStep:
            errors.update(self.validate_step(step))
        self.errors = errors
        if errors:
            return None

        totals = self.totals
        draft = OrderDraft(
            items=self.cart.lines,
            customer_info=self.customer_info.model_copy(
                update={
                    "first_name": self.customer_info.first_name.strip(),
                    "last_name": self.customer_info.last_name.strip(),
                    "email": self.customer_info.email.strip(),
                }
            ),
            delivery_info=build_delivery_info(self.delivery, self.delivery_costs),
            payment_info=build_payment_info(self.payment),
            total_amount=totals.total_amount,
            discount=totals.discount,
        )

        self.order_id = self.orders.create_order(draft)
        self.cart.clear_cart()
        return self.order_id

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    def _ensure_open(self) -> None:
        if self.is_closed:
            raise ValidationError({"checkout": ["This checkout has already been completed"]})

    def _clear_errors(self, changed_fields) -> None:
        for field in changed_fields:
            self.errors.pop(field, None)
