import json
from datetime import UTC, datetime, timedelta

import pydantic
import pytest
from ordering.cart.cart import CartLine
from ordering.checkout.details import CardPayment, CashPayment, CourierDelivery, CustomerInfo, PickupDelivery
from ordering.order.ledger import OrderLedger
from ordering.order.order import OrderDraft, OrderStatus
from shared.exceptions import ValidationError

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def frozen_clock():
    return NOW


@pytest.fixture
def ledger(store):
    return OrderLedger(store, clock=frozen_clock)


@pytest.fixture
def draft(tv, phone):
    return OrderDraft(
        items=(CartLine(product=tv, quantity=5), CartLine(product=phone, quantity=10)),
        customer_info=CustomerInfo(
            first_name="Aziz", last_name="Karimov", email="aziz@example.uz", phone="+998901234567"
        ),
        delivery_info=CourierDelivery(address="1 Amir Temur St", city="Tashkent", cost=15_000),
        payment_info=CardPayment(
            card_number="4111111111111111", card_holder="AZIZ KARIMOV", expiry_date="12/27", cvv="123"
        ),
        total_amount=100_000,
        discount=10_000,
    )


class TestOrderDraft:
    def test_final_amount(self, draft):
        assert draft.final_amount == 105_000

    def test_requires_at_least_one_line(self, draft):
        with pytest.raises(pydantic.ValidationError):
            OrderDraft(**{**dict(draft), "items": ()})


class TestCreateOrder:
    def test_new_order_is_pending(self, ledger, draft):
        order = ledger.get_order_by_id(ledger.create_order(draft))

        assert order.status is OrderStatus.PENDING
        assert order.final_amount == 105_000
        assert order.total_items == 15

    def test_dates_follow_the_clock(self, ledger, draft):
        order = ledger.get_order_by_id(ledger.create_order(draft))

        assert order.created_at == NOW
        assert order.estimated_delivery == NOW + timedelta(days=3)

    def test_id_is_millisecond_timestamp(self, ledger, draft):
        assert ledger.create_order(draft) == str(int(NOW.timestamp() * 1000))

    def test_ids_stay_unique_on_the_same_millisecond(self, ledger, draft):
        first = ledger.create_order(draft)
        second = ledger.create_order(draft)

        assert first != second
        assert int(second) == int(first) + 1

    def test_ignores_non_numeric_stored_ids(self, store, ledger, draft):
        ledger.create_order(draft)
        stored = json.loads(store.get("uzum-orders"))
        stored[0]["id"] = "\u00b2"
        store.set("uzum-orders", json.dumps(stored))

        reloaded = OrderLedger(store, clock=frozen_clock)

        assert reloaded.create_order(draft) == str(int(NOW.timestamp() * 1000))

    def test_newest_order_first(self, ledger, draft):
        first = ledger.create_order(draft)
        second = ledger.create_order(draft.model_copy(update={"payment_info": CashPayment()}))

        assert [o.id for o in ledger.orders] == [second, first]

    def test_orders_are_persisted(self, store, ledger, draft):
        order_id = ledger.create_order(draft)

        reloaded = OrderLedger(store)
        assert reloaded.get_order_by_id(order_id) == ledger.get_order_by_id(order_id)
        assert json.loads(store.get("uzum-orders"))[0]["delivery_info"]["type"] == "courier"

    def test_line_snapshots_are_kept(self, ledger, draft, tv):
        order = ledger.get_order_by_id(ledger.create_order(draft))
        assert order.items[0].product == tv


class TestQueries:
    def test_unknown_id(self, ledger, draft):
        ledger.create_order(draft)
        assert ledger.get_order_by_id("missing") is None

    def test_orders_for_customer(self, ledger, draft):
        mine = ledger.create_order(draft)
        other = draft.model_copy(
            update={"customer_info": draft.customer_info.model_copy(update={"email": "someone@example.uz"})}
        )
        ledger.create_order(other)

        assert [o.id for o in ledger.orders_for_customer("aziz@example.uz")] == [mine]

    def test_empty_ledger(self, ledger):
        assert ledger.orders == ()


class TestUpdateOrderStatus:
    def test_updates_status(self, ledger, draft):
        order_id = ledger.create_order(draft)

        updated = ledger.update_order_status(order_id, OrderStatus.SHIPPED)

        assert updated.status is OrderStatus.SHIPPED
        assert ledger.get_order_by_id(order_id).status is OrderStatus.SHIPPED

    def test_accepts_status_values(self, ledger, draft):
        order_id = ledger.create_order(draft)
        assert ledger.update_order_status(order_id, "confirmed").status is OrderStatus.CONFIRMED

    def test_any_status_may_follow_any_other(self, ledger, draft):
        order_id = ledger.create_order(draft)
        ledger.update_order_status(order_id, OrderStatus.CANCELLED)

        assert ledger.update_order_status(order_id, OrderStatus.PENDING).status is OrderStatus.PENDING

    def test_other_fields_unchanged(self, ledger, draft):
        order_id = ledger.create_order(draft)
        before = ledger.get_order_by_id(order_id)

        after = ledger.update_order_status(order_id, OrderStatus.DELIVERED)

        assert after.model_dump(exclude={"status"}) == before.model_dump(exclude={"status"})

    def test_unknown_order_is_a_no_op(self, ledger, draft):
        ledger.create_order(draft)
        assert ledger.update_order_status("missing", OrderStatus.SHIPPED) is None

    def test_unknown_status(self, ledger, draft):
        order_id = ledger.create_order(draft)

        with pytest.raises(ValidationError) as exc:
            ledger.update_order_status(order_id, "lost")

        assert "status" in exc.value.messages
        assert ledger.get_order_by_id(order_id).status is OrderStatus.PENDING

    def test_status_change_is_persisted(self, store, ledger, draft):
        order_id = ledger.create_order(draft)
        ledger.update_order_status(order_id, OrderStatus.PROCESSING)

        assert OrderLedger(store).get_order_by_id(order_id).status is OrderStatus.PROCESSING


@pytest.mark.parametrize(
    "status,label",
    [(OrderStatus.PENDING, "Awaiting confirmation"), (OrderStatus.SHIPPED, "Shipped")],
)
def test_status_labels(status, label):
    assert status.label == label


def test_pickup_orders_have_no_delivery_cost(ledger, draft):
    pickup = draft.model_copy(update={"delivery_info": PickupDelivery(pickup_point="Next mall, 1 Shakhrisabz St", cost=0)})
    order = ledger.get_order_by_id(ledger.create_order(pickup))
    assert order.final_amount == 90_000
