"""Catalog queries: lookup, search, and the filtered/sorted/paginated listing."""

import math
from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel, Field, TypeAdapter

from catalog.domain import logger
from catalog.product.product import Product

ALL_CATEGORIES = "all"
DEFAULT_PRICE_RANGE = (0, 500_000)
DEFAULT_PAGE_SIZE = 20

_PRODUCTS = TypeAdapter(list[Product])


class SortOrder(Enum):
    POPULAR = "popular"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    RATING = "rating"
    NAME = "name"


class CatalogQuery(BaseModel):
    category: str = ALL_CATEGORIES
    min_price: int = Field(default=DEFAULT_PRICE_RANGE[0], ge=0)
    max_price: int = Field(default=DEFAULT_PRICE_RANGE[1], ge=0)
    sort: SortOrder = SortOrder.POPULAR
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)


class CatalogPage(BaseModel):
    items: tuple[Product, ...]
    total: int
    page: int
    total_pages: int


_SORT_KEYS = {
    SortOrder.PRICE_LOW: (lambda p: p.price, False),
    SortOrder.PRICE_HIGH: (lambda p: p.price, True),
    SortOrder.RATING: (lambda p: p.rating, True),
    SortOrder.NAME: (lambda p: p.title.casefold(), False),
}


class Catalog:
    """Immutable, ordered collection of products."""

    def __init__(self, products: Iterable[Product]):
        self._products = tuple(products)

    @classmethod
    def from_records(cls, records: Iterable[dict]) -> "Catalog":
        products = _PRODUCTS.validate_python(list(records))
        logger.info("Catalog loaded", product_count=len(products))
        return cls(products)

    def __len__(self) -> int:
        return len(self._products)

    def list_all(self) -> tuple[Product, ...]:
        return self._products

    def get(self, product_id) -> Product | None:
        """Find a product by id; ``1`` and ``"1"`` refer to the same product."""
        wanted = str(product_id)
        return next((p for p in self._products if str(p.id) == wanted), None)

    def categories(self) -> tuple[str, ...]:
        return tuple(dict.fromkeys(p.type for p in self._products))

    def search(self, text: str) -> tuple[Product, ...]:
        needle = text.strip().casefold()
        if not needle:
            return ()
        return tuple(
            p for p in self._products if needle in p.title.casefold() or needle in p.description.casefold()
        )

    def browse(self, query: CatalogQuery | None = None) -> CatalogPage:
        query = query or CatalogQuery()

        products = [
            p
            for p in self._products
            if (query.category == ALL_CATEGORIES or p.type == query.category)
            and query.min_price <= p.price <= query.max_price
        ]

        # POPULAR keeps catalog order
        if query.sort in _SORT_KEYS:
            key, reverse = _SORT_KEYS[query.sort]
            products.sort(key=key, reverse=reverse)

        start = (query.page - 1) * query.page_size
        return CatalogPage(
            items=tuple(products[start : start + query.page_size]),
            total=len(products),
            page=query.page,
            total_pages=math.ceil(len(products) / query.page_size),
        )
