"""Application tests for order read operations."""

import json

import pytest
from ordering.order.placement import PlaceOrder
from ordering.order.queries import all_orders, orders_for_customer, status_history
from ordering.order.status import UpdateOrderStatus
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError


def _place_order(customer_id="cust-001", name="Ada Baker", email="ada@example.com", phone="555-0100"):
    return current_domain.process(
        PlaceOrder(
            customer_id=customer_id,
            customer_name=name,
            customer_email=email,
            customer_phone=phone,
            delivery_method="pickup",
            items=json.dumps([{"product_id": 1, "product_name": "Sourdough Loaf", "quantity": 1, "unit_price": 1000}]),
        ),
        asynchronous=False,
    )


def _update(order_id, status):
    current_domain.process(
        UpdateOrderStatus(order_id=order_id, status=status, changed_by="admin@bakehouse.test"),
        asynchronous=False,
    )


class TestStatusHistory:
    def test_placed_preparing_ready_returns_three_rows_in_call_order(self):
        order_id = _place_order()
        _update(order_id, "preparing")
        _update(order_id, "ready")

        history = status_history(order_id)
        assert [entry.status for entry in history] == ["placed", "preparing", "ready"]
        timestamps = [entry.timestamp for entry in history]
        assert timestamps == sorted(timestamps)

    def test_unknown_order(self):
        with pytest.raises(ObjectNotFoundError):
            status_history("missing-order")


class TestOrdersForCustomer:
    def test_newest_first(self):
        first = _place_order()
        second = _place_order()
        assert [str(o.id) for o in orders_for_customer("cust-001")] == [second, first]

    def test_only_the_customers_orders(self):
        _place_order(customer_id="cust-001")
        other = _place_order(customer_id="cust-002")
        assert [str(o.id) for o in orders_for_customer("cust-002")] == [other]

    def test_no_orders(self):
        assert orders_for_customer("cust-nobody") == []


class TestAllOrders:
    def test_filter_by_status(self):
        placed = _place_order()
        baking = _place_order()
        _update(baking, "baking")
        assert [str(o.id) for o in all_orders(status="baking")] == [baking]
        assert [str(o.id) for o in all_orders(status="placed")] == [placed]

    def test_search_by_name_email_phone_and_id(self):
        ada = _place_order(name="Ada Baker", email="ada@example.com", phone="555-0100")
        grace = _place_order(customer_id="cust-002", name="Grace Hopper", email="grace@navy.test", phone="555-0199")

        assert [str(o.id) for o in all_orders(search="hopper")] == [grace]
        assert [str(o.id) for o in all_orders(search="ADA@EXAMPLE")] == [ada]
        assert [str(o.id) for o in all_orders(search="0199")] == [grace]
        assert [str(o.id) for o in all_orders(search=ada[:8])] == [ada]

    def test_no_filters_lists_everything_newest_first(self):
        first = _place_order()
        second = _place_order()
        assert [str(o.id) for o in all_orders()] == [second, first]

    def test_unknown_status_filter(self):
        with pytest.raises(ValidationError):
            all_orders(status="eaten")


class TestLongOrderBook:
    def test_listings_go_past_one_page(self):
        order_ids = [_place_order() for _ in range(105)]

        listed = all_orders()
        assert len(listed) == 105
        assert str(listed[0].id) == order_ids[-1]
        assert {str(order.id) for order in listed} == set(order_ids)

        mine = orders_for_customer("cust-001")
        assert len(mine) == 105
        assert str(mine[0].id) == order_ids[-1]

    def test_status_filter_goes_past_one_page(self):
        for _ in range(101):
            _place_order()
        newest = _place_order()
        _update(newest, "preparing")

        assert len(all_orders(status="placed")) == 101
        assert [str(order.id) for order in all_orders(status="preparing")] == [newest]
