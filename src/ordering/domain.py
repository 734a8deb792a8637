"""Ordering bounded context — Shopping Cart, Favorites, Checkout and Orders.

Holds the session's cart and favorites, the checkout wizard that turns a
cart into an order draft, and the ledger of placed orders. All state is
written through to the KV store on every mutation.
"""

import structlog

logger = structlog.get_logger(__name__)
