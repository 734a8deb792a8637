"""Catalog bounded context: the static, read-only product assortment.

Products are loaded once at startup and never change while the storefront
runs. Other contexts embed product snapshots by value.
"""

import structlog

logger = structlog.get_logger(__name__)
