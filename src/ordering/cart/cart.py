"""Shopping cart ledger — one line per product, quantities merged on add.

Lines embed the product by value, so totals use the unit price captured when
the product was added. The full ledger is written to the KV store after every
change.
"""

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from catalog.product.product import Product
from ordering.domain import logger
from shared.exceptions import ValidationError
from shared.kvstore.port import KVStore
from shared.records import load_collection, save_collection

CART_KEY = "uzum-cart"


class CartLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    product: Product
    quantity: int = Field(ge=1)

    @property
    def product_id(self):
        return self.product.id

    @property
    def line_total(self) -> int:
        return self.product.price * self.quantity


_LINES = TypeAdapter(list[CartLine])


class CartLedger:
    def __init__(self, store: KVStore, *, key: str = CART_KEY):
        self.store = store
        self.key = key
        self._lines: list[CartLine] = self._load()

    def _load(self) -> list[CartLine]:
        lines = load_collection(self.store, self.key, _LINES)
        ids = [str(line.product_id) for line in lines]
        if len(ids) != len(set(ids)):
            logger.warning("Discarding stored cart with duplicate lines", key=self.key)
            return []
        return lines

    def _save(self) -> None:
        save_collection(self.store, self.key, _LINES, self._lines)

    def _index_of(self, product_id) -> int | None:
        return next((i for i, line in enumerate(self._lines) if str(line.product_id) == str(product_id)), None)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def lines(self) -> tuple[CartLine, ...]:
        return tuple(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def get_line(self, product_id) -> CartLine | None:
        index = self._index_of(product_id)
        return self._lines[index] if index is not None else None

    def get_total_items(self) -> int:
        return sum(line.quantity for line in self._lines)

    def get_total_price(self) -> int:
        return sum(line.line_total for line in self._lines)

    # -------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------
    def add_to_cart(self, product: Product, quantity: int = 1) -> CartLine:
        """Add ``quantity`` of ``product``, merging into an existing line."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        index = self._index_of(product.id)
        if index is None:
            line = CartLine(product=product, quantity=quantity)
            self._lines.append(line)
        else:
            line = self._lines[index].model_copy(update={"quantity": self._lines[index].quantity + quantity})
            self._lines[index] = line

        self._save()
        logger.info("Item added to cart", product_id=product.id, quantity=quantity, line_quantity=line.quantity)
        return line

    def remove_from_cart(self, product_id) -> None:
        index = self._index_of(product_id)
        if index is None:
            return

        del self._lines[index]
        self._save()
        logger.info("Item removed from cart", product_id=product_id)

    def update_quantity(self, product_id, quantity: int) -> None:
        """Set a line's quantity exactly; zero or less removes the line."""
        if quantity <= 0:
            self.remove_from_cart(product_id)
            return

        index = self._index_of(product_id)
        if index is None:
            return

        self._lines[index] = self._lines[index].model_copy(update={"quantity": quantity})
        self._save()
        logger.info("Cart quantity updated", product_id=product_id, quantity=quantity)

    def clear_cart(self) -> None:
        self._lines = []
        self._save()
        logger.info("Cart cleared")
