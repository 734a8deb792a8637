from pathlib import Path

import pytest


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        # Mark tests based on their directory
        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture
def store():
    from shared.kvstore.memory_adapter import InMemoryKVStore

    return InMemoryKVStore()


@pytest.fixture
def tv():
    from catalog.product.product import Product

    return Product(id=1, title="Samsung 55\" TV", price=10_000, sale_percentage=20, rating=4.8, type="tv")


@pytest.fixture
def phone():
    from catalog.product.product import Product

    return Product(id=2, title="Galaxy A55", price=5_000, rating=4.5, type="phone")


@pytest.fixture
def catalog(tv, phone):
    from catalog.product.catalog import Catalog
    from catalog.product.product import Product

    return Catalog(
        [
            tv,
            phone,
            Product(id=3, title="Air fryer", price=120_000, rating=4.9, type="appliance"),
            Product(id="acc-1", title="Headphones", price=49_000, rating=4.1, type="audio"),
        ]
    )
