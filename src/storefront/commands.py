"""Commands accepted by ``Storefront.apply``.

Products are referenced by id and resolved through the catalog when the
command is applied.
"""

from pydantic import BaseModel, ConfigDict, Field

from identity.customer.registration import RegistrationForm
from ordering.order.order import OrderStatus


class Command(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCart(Command):
    product_id: str | int
    quantity: int = Field(default=1, ge=1)


class RemoveFromCart(Command):
    product_id: str | int


class UpdateCartQuantity(Command):
    """Set a line's quantity; zero or a negative value removes the line."""

    product_id: str | int
    quantity: int


class ClearCart(Command):
    pass


# ---------------------------------------------------------------------------
# Favorites
# ---------------------------------------------------------------------------
class AddToFavorites(Command):
    product_id: str | int


class RemoveFromFavorites(Command):
    product_id: str | int


class ToggleFavorite(Command):
    product_id: str | int


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class UpdateOrderStatus(Command):
    order_id: str
    status: OrderStatus


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------
class RegisterCustomer(RegistrationForm, Command):
    """Create an account and sign it in."""


class Login(Command):
    email_or_phone: str
    password: str


class Logout(Command):
    pass
