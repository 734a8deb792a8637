"""Cart, favorites, checkout and order history over a KV store."""

from storefront.app import Storefront, StorefrontState, create_storefront

__all__ = ["Storefront", "StorefrontState", "create_storefront"]
