"""Saved products: the set of items a customer keeps for later."""

from pydantic import TypeAdapter

from catalog.product.product import Product
from ordering.domain import logger
from shared.kvstore.port import KVStore
from shared.records import load_collection, save_collection

FAVORITES_KEY = "uzum-favorites"

_PRODUCTS = TypeAdapter(list[Product])


class FavoritesSet:
    def __init__(self, store: KVStore, *, key: str = FAVORITES_KEY):
        self.store = store
        self.key = key

        # Set semantics: keep the first snapshot of any duplicated id
        seen = set()
        self._products: list[Product] = []
        for product in load_collection(store, key, _PRODUCTS):
            if str(product.id) not in seen:
                seen.add(str(product.id))
                self._products.append(product)

    def __len__(self) -> int:
        return len(self._products)

    def __contains__(self, product_id) -> bool:
        return self.is_in_favorites(product_id)

    @property
    def products(self) -> tuple[Product, ...]:
        return tuple(self._products)

    def is_in_favorites(self, product_id) -> bool:
        return any(str(p.id) == str(product_id) for p in self._products)

    def add_to_favorites(self, product: Product) -> None:
        if self.is_in_favorites(product.id):
            return

        self._products.append(product)
        self._save()
        logger.info("Product added to favorites", product_id=product.id)

    def remove_from_favorites(self, product_id) -> None:
        remaining = [p for p in self._products if str(p.id) != str(product_id)]
        if len(remaining) == len(self._products):
            return

        self._products = remaining
        self._save()
        logger.info("Product removed from favorites", product_id=product_id)

    def toggle_favorite(self, product: Product) -> bool:
        """Flip membership of ``product``; returns True when it is now a favorite."""
        if self.is_in_favorites(product.id):
            self.remove_from_favorites(product.id)
            return False
        self.add_to_favorites(product)
        return True

    def _save(self) -> None:
        save_collection(self.store, self.key, _PRODUCTS, self._products)
