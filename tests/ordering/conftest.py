import pytest
from ordering.cart.cart import CartLedger
from ordering.order.ledger import OrderLedger


@pytest.fixture
def cart(store):
    return CartLedger(store)


@pytest.fixture
def orders(store):
    return OrderLedger(store)
