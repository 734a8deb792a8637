"""Storefront composition root and synchronous command interface.

``create_storefront`` builds every collaborator once at startup and wires
them together; nothing is held in module-level state. Presentation layers
drive the storefront through ``apply(command)`` and read the returned
``StorefrontState``.
"""

from dataclasses import dataclass
from datetime import timedelta
from functools import singledispatchmethod

import structlog
from pydantic import BaseModel, ConfigDict

from catalog.product.catalog import Catalog
from catalog.product.product import Product
from catalog.product.seed import load_default_catalog
from identity.customer.account import User
from identity.customer.registration import AccountRegistry, RegistrationForm
from ordering.cart.cart import CartLedger, CartLine
from ordering.cart.favorites import FavoritesSet
from ordering.checkout.wizard import CheckoutWizard
from ordering.order.ledger import OrderLedger
from ordering.order.order import Order
from shared.config import Settings
from shared.exceptions import ValidationError
from shared.kvstore import create_store
from shared.kvstore.port import KVStore
from shared.logging import configure_logging
from storefront.commands import (
    AddToCart,
    AddToFavorites,
    ClearCart,
    Login,
    Logout,
    RegisterCustomer,
    RemoveFromCart,
    RemoveFromFavorites,
    ToggleFavorite,
    UpdateCartQuantity,
    UpdateOrderStatus,
)

logger = structlog.get_logger(__name__)


class StorefrontState(BaseModel):
    """Read model of everything a page needs after a command."""

    model_config = ConfigDict(frozen=True)

    cart: tuple[CartLine, ...]
    total_items: int
    total_price: int
    favorites: tuple[Product, ...]
    orders: tuple[Order, ...]
    user: User | None = None


@dataclass
class Storefront:
    settings: Settings
    store: KVStore
    catalog: Catalog
    cart: CartLedger
    favorites: FavoritesSet
    orders: OrderLedger
    accounts: AccountRegistry

    def product(self, product_id) -> Product:
        product = self.catalog.get(product_id)
        if product is None:
            raise ValidationError({"product_id": [f"Unknown product: {product_id}"]})
        return product

    def state(self) -> StorefrontState:
        return StorefrontState(
            cart=self.cart.lines,
            total_items=self.cart.get_total_items(),
            total_price=self.cart.get_total_price(),
            favorites=self.favorites.products,
            orders=self.orders.orders,
            user=self.accounts.current_user,
        )

    def begin_checkout(self) -> CheckoutWizard:
        """Start a checkout for the current cart, pre-filled from the signed-in user."""
        return CheckoutWizard(
            self.cart,
            self.orders,
            user=self.accounts.current_user,
            country_code=self.settings.country_code,
            discount_rate=self.settings.discount_rate,
        )

    # -------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------
    @singledispatchmethod
    def apply(self, command) -> StorefrontState:
        raise TypeError(f"Unsupported command: {type(command).__name__}")

    @apply.register
    def _add_to_cart(self, command: AddToCart) -> StorefrontState:
        self.cart.add_to_cart(self.product(command.product_id), command.quantity)
        return self.state()

    @apply.register
    def _remove_from_cart(self, command: RemoveFromCart) -> StorefrontState:
        self.cart.remove_from_cart(self._stored_id(command.product_id))
        return self.state()

    @apply.register
    def _update_cart_quantity(self, command: UpdateCartQuantity) -> StorefrontState:
        self.cart.update_quantity(self._stored_id(command.product_id), command.quantity)
        return self.state()

    @apply.register
    def _clear_cart(self, command: ClearCart) -> StorefrontState:
        self.cart.clear_cart()
        return self.state()

    @apply.register
    def _add_to_favorites(self, command: AddToFavorites) -> StorefrontState:
        self.favorites.add_to_favorites(self.product(command.product_id))
        return self.state()

    @apply.register
    def _remove_from_favorites(self, command: RemoveFromFavorites) -> StorefrontState:
        self.favorites.remove_from_favorites(self._stored_id(command.product_id))
        return self.state()

    @apply.register
    def _toggle_favorite(self, command: ToggleFavorite) -> StorefrontState:
        self.favorites.toggle_favorite(self.product(command.product_id))
        return self.state()

    @apply.register
    def _update_order_status(self, command: UpdateOrderStatus) -> StorefrontState:
        self.orders.update_order_status(command.order_id, command.status)
        return self.state()

    @apply.register
    def _register_customer(self, command: RegisterCustomer) -> StorefrontState:
        form = RegistrationForm(**command.model_dump(include=set(RegistrationForm.model_fields)))
        self.accounts.register(form)
        return self.state()

    @apply.register
    def _login(self, command: Login) -> StorefrontState:
        self.accounts.login(command.email_or_phone, command.password)
        return self.state()

    @apply.register
    def _logout(self, command: Logout) -> StorefrontState:
        self.accounts.logout()
        return self.state()

    def _stored_id(self, product_id):
        """Map a command's product id onto the id type the catalog uses."""
        product = self.catalog.get(product_id)
        return product.id if product is not None else product_id


def create_storefront(
    settings: Settings | None = None,
    *,
    store: KVStore | None = None,
    catalog: Catalog | None = None,
) -> Storefront:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level, settings.log_format)

    store = store if store is not None else create_store(settings)
    catalog = catalog if catalog is not None else load_default_catalog()

    storefront = Storefront(
        settings=settings,
        store=store,
        catalog=catalog,
        cart=CartLedger(store, key=settings.storage_key("cart")),
        favorites=FavoritesSet(store, key=settings.storage_key("favorites")),
        orders=OrderLedger(
            store,
            key=settings.storage_key("orders"),
            delivery_window=timedelta(days=settings.delivery_window_days),
            latency_seconds=settings.order_latency_seconds,
        ),
        accounts=AccountRegistry(
            store,
            users_key=settings.storage_key("users"),
            session_key=settings.storage_key("user"),
            country_code=settings.country_code,
        ),
    )
    logger.info("Storefront ready", env=settings.env, kv_adapter=settings.kv_adapter, products=len(catalog))
    return storefront
