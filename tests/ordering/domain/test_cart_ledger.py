"""Tests for the cart ledger: merging, quantities, totals and persistence."""

import pytest
from catalog.product.product import Product
from ordering.cart.cart import CART_KEY, CartLedger
from shared.exceptions import ValidationError


class TestAddToCart:
    def test_add_creates_line(self, cart, tv):
        cart.add_to_cart(tv)
        assert len(cart.lines) == 1
        assert cart.lines[0].quantity == 1

    def test_repeated_adds_sum_quantities(self, cart, tv):
        for quantity in (1, 2, 4):
            cart.add_to_cart(tv, quantity)
        assert len(cart.lines) == 1
        assert cart.get_line(tv.id).quantity == 7

    def test_different_products_get_separate_lines(self, cart, tv, phone):
        cart.add_to_cart(tv)
        cart.add_to_cart(phone)
        assert [line.product_id for line in cart.lines] == [tv.id, phone.id]

    def test_no_upper_bound(self, cart, tv):
        cart.add_to_cart(tv, 10_000)
        assert cart.get_total_items() == 10_000

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_quantity_must_be_positive(self, cart, tv, quantity):
        with pytest.raises(ValidationError):
            cart.add_to_cart(tv, quantity)
        assert cart.is_empty


class TestRemoveFromCart:
    def test_remove_line(self, cart, tv, phone):
        cart.add_to_cart(tv)
        cart.add_to_cart(phone)
        cart.remove_from_cart(tv.id)
        assert [line.product_id for line in cart.lines] == [phone.id]

    def test_remove_missing_line_is_a_no_op(self, cart, tv):
        cart.add_to_cart(tv)
        cart.remove_from_cart("missing")
        assert len(cart.lines) == 1


class TestUpdateQuantity:
    def test_sets_quantity_exactly(self, cart, tv):
        cart.add_to_cart(tv, 3)
        cart.update_quantity(tv.id, 5)
        assert cart.get_line(tv.id).quantity == 5

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_zero_or_negative_removes_line(self, cart, tv, quantity):
        cart.add_to_cart(tv, 2)
        cart.update_quantity(tv.id, quantity)
        assert cart.get_line(tv.id) is None
        assert cart.is_empty

    def test_update_missing_line_is_a_no_op(self, cart, tv):
        cart.update_quantity(tv.id, 3)
        assert cart.is_empty


class TestTotals:
    def test_empty_cart(self, cart):
        assert cart.get_total_items() == 0
        assert cart.get_total_price() == 0

    def test_totals_sum_price_times_quantity(self, cart, tv, phone):
        cart.add_to_cart(tv, 2)
        cart.add_to_cart(phone, 3)
        assert cart.get_total_items() == 5
        assert cart.get_total_price() == 35_000

    def test_line_total(self, cart, tv):
        line = cart.add_to_cart(tv, 2)
        assert line.line_total == 20_000

    def test_clear_cart(self, cart, tv):
        cart.add_to_cart(tv)
        cart.clear_cart()
        assert cart.is_empty
        assert cart.get_total_price() == 0


class TestPersistence:
    def test_every_mutation_is_written_through(self, store, tv, phone):
        cart = CartLedger(store)
        cart.add_to_cart(tv, 2)
        cart.add_to_cart(phone)
        cart.update_quantity(phone.id, 4)

        reloaded = CartLedger(store)
        assert reloaded.lines == cart.lines

    def test_clear_is_persisted(self, store, tv):
        cart = CartLedger(store)
        cart.add_to_cart(tv)
        cart.clear_cart()
        assert store.get(CART_KEY) == "[]"

    def test_unit_price_is_the_snapshot_taken_on_add(self, store, tv):
        CartLedger(store).add_to_cart(tv)
        repriced = Product(**{**tv.model_dump(), "price": 1})

        reloaded = CartLedger(store)
        reloaded.add_to_cart(repriced)
        assert reloaded.get_line(tv.id).product.price == tv.price

    def test_malformed_stored_cart_loads_empty(self, store):
        store.set(CART_KEY, '[{"product": {"id": 1}, "quantity": 2}]')
        assert CartLedger(store).is_empty

    def test_stored_zero_quantity_is_rejected(self, store, tv):
        store.set(CART_KEY, f'[{{"product": {tv.model_dump_json()}, "quantity": 0}}]')
        assert CartLedger(store).is_empty

    def test_duplicate_stored_lines_load_empty(self, store, tv):
        line = f'{{"product": {tv.model_dump_json()}, "quantity": 1}}'
        store.set(CART_KEY, f"[{line}, {line}]")
        assert CartLedger(store).is_empty

    def test_custom_key(self, store, tv):
        CartLedger(store, key="shop-cart").add_to_cart(tv)
        assert store.get("shop-cart") is not None
        assert store.get(CART_KEY) is None


def test_numeric_and_string_ids_share_a_line(cart, tv):
    cart.add_to_cart(tv, 2)
    cart.add_to_cart(tv.model_copy(update={"id": "1"}), 3)

    assert len(cart.lines) == 1
    assert cart.get_line("1").quantity == 5

    cart.remove_from_cart("1")
    assert cart.is_empty
