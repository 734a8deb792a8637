"""Field-level validation and input formatting for the checkout steps.

Validators return ``{field: [messages]}``; an empty dict means the step is
complete. Builders turn a validated form into the recorded variant.
"""

import re

from identity.shared.email import is_valid_email
from identity.shared.phone import DEFAULT_COUNTRY_CODE, is_valid_phone
from ordering.checkout.details import (
    DELIVERY_COSTS,
    PICKUP_POINTS,
    CardPayment,
    CashPayment,
    CourierDelivery,
    CustomerInfo,
    DeliveryForm,
    DeliveryInfo,
    DeliveryType,
    OnlinePayment,
    PaymentForm,
    PaymentInfo,
    PaymentMethod,
    PickupDelivery,
    PostDelivery,
)

CARD_NUMBER_DIGITS = 16
EXPIRY_DIGITS = 4
CVV_DIGITS = 3

_EXPIRY_PATTERN = re.compile(r"^(\d{2})/(\d{2})$")


def validate_customer_info(info: CustomerInfo, country_code: str = DEFAULT_COUNTRY_CODE) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}

    if not info.first_name.strip():
        errors["first_name"] = ["Enter your first name"]
    if not info.last_name.strip():
        errors["last_name"] = ["Enter your last name"]

    if not info.email.strip():
        errors["email"] = ["Enter your email"]
    elif not is_valid_email(info.email.strip()):
        errors["email"] = ["Enter a valid email"]

    if not info.phone.strip():
        errors["phone"] = ["Enter your phone number"]
    elif not is_valid_phone(info.phone, country_code):
        errors["phone"] = [f"Enter a valid phone number (+{country_code}XXXXXXXXX)"]

    return errors


def validate_delivery(form: DeliveryForm, pickup_points=PICKUP_POINTS) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}

    if form.type is DeliveryType.PICKUP:
        if not form.pickup_point:
            errors["pickup_point"] = ["Choose a pickup point"]
        elif form.pickup_point not in pickup_points:
            errors["pickup_point"] = ["Choose a pickup point from the list"]
        return errors

    if not form.address.strip():
        errors["address"] = ["Enter the delivery address"]
    if not form.city.strip():
        errors["city"] = ["Enter the city"]
    if form.type is DeliveryType.POST and not form.postal_code.strip():
        errors["postal_code"] = ["Enter the postal code"]

    return errors


def validate_payment(form: PaymentForm) -> dict[str, list[str]]:
    if form.method is not PaymentMethod.CARD:
        return {}

    errors: dict[str, list[str]] = {}

    card_number = re.sub(r"\s", "", form.card_number)
    if not card_number:
        errors["card_number"] = ["Enter the card number"]
    elif not re.fullmatch(rf"\d{{{CARD_NUMBER_DIGITS}}}", card_number):
        errors["card_number"] = [f"Card number must have {CARD_NUMBER_DIGITS} digits"]

    if not form.card_holder.strip():
        errors["card_holder"] = ["Enter the card holder name"]

    expiry = form.expiry_date.strip()
    match = _EXPIRY_PATTERN.match(expiry)
    if not expiry:
        errors["expiry_date"] = ["Enter the expiry date"]
    elif match is None or not 1 <= int(match.group(1)) <= 12:
        errors["expiry_date"] = ["Use the MM/YY format"]

    if not form.cvv.strip():
        errors["cvv"] = ["Enter the CVV code"]
    elif not re.fullmatch(rf"\d{{{CVV_DIGITS}}}", form.cvv):
        errors["cvv"] = [f"CVV must have {CVV_DIGITS} digits"]

    return errors


def build_delivery_info(form: DeliveryForm, costs=DELIVERY_COSTS) -> DeliveryInfo:
    cost = costs[form.type]
    if form.type is DeliveryType.PICKUP:
        return PickupDelivery(pickup_point=form.pickup_point, cost=cost)
    if form.type is DeliveryType.POST:
        return PostDelivery(
            address=form.address.strip(),
            city=form.city.strip(),
            postal_code=form.postal_code.strip(),
            cost=cost,
        )
    return CourierDelivery(
        address=form.address.strip(),
        city=form.city.strip(),
        postal_code=form.postal_code.strip(),
        cost=cost,
    )


def build_payment_info(form: PaymentForm) -> PaymentInfo:
    if form.method is PaymentMethod.CASH:
        return CashPayment()
    if form.method is PaymentMethod.ONLINE:
        return OnlinePayment()
    return CardPayment(
        card_number=re.sub(r"\s", "", form.card_number),
        card_holder=form.card_holder.strip(),
        expiry_date=form.expiry_date.strip(),
        cvv=form.cvv,
    )


# ---------------------------------------------------------------------------
# Input formatting
# ---------------------------------------------------------------------------
def format_card_number(value: str) -> str:
    """Keep digits only, grouped in fours: ``"4111111111111111"`` -> ``"4111 1111 1111 1111"``."""
    digits = re.sub(r"\D", "", value)
    return re.sub(r"(\d{4})(?=\d)", r"\1 ", digits)


def format_expiry_date(value: str) -> str:
    """Insert the slash once the month is typed: ``"1227"`` -> ``"12/27"``."""
    digits = re.sub(r"\D", "", value)
    if len(digits) >= 2:
        return f"{digits[:2]}/{digits[2:4]}"
    return digits


def digit_count(value: str) -> int:
    return len(re.sub(r"\D", "", value))
