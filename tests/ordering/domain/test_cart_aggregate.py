"""Tests for the ShoppingCart aggregate and its line items."""

from decimal import Decimal

from ordering.cart.cart import ShoppingCart
from ordering.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated


def _make_cart():
    return ShoppingCart.create()


def _add(cart, product_id=1, name="Sourdough Loaf", unit_price=1000, image="sourdough.jpg"):
    cart.add_item(product_id=product_id, name=name, unit_price=unit_price, image=image)


class TestAddItem:
    def test_add_new_product_appends_line_with_quantity_one(self):
        cart = _make_cart()
        _add(cart)
        assert len(cart.items) == 1
        assert cart.items[0].product_id == 1
        assert cart.items[0].quantity == 1

    def test_add_existing_product_increments_quantity(self):
        cart = _make_cart()
        _add(cart)
        _add(cart)
        _add(cart)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 3

    def test_lines_keep_insertion_order(self):
        cart = _make_cart()
        _add(cart, product_id=3, name="Croissant")
        _add(cart, product_id=1, name="Sourdough Loaf")
        _add(cart, product_id=2, name="Baguette")
        _add(cart, product_id=3, name="Croissant")
        assert [item.product_id for item in cart.items] == [3, 1, 2]

    def test_string_product_ids_refer_to_the_same_line(self):
        cart = _make_cart()
        _add(cart, product_id=7)
        _add(cart, product_id="7")
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2

    def test_add_raises_event(self):
        cart = _make_cart()
        _add(cart)
        _add(cart)
        added_events = [e for e in cart._events if isinstance(e, CartItemAdded)]
        assert len(added_events) == 2
        assert added_events[-1].product_id == 1
        assert added_events[-1].quantity == 2


class TestUpdateQuantity:
    def test_update_sets_quantity(self):
        cart = _make_cart()
        _add(cart)
        cart.update_item_quantity(1, 5)
        assert cart.items[0].quantity == 5

    def test_update_raises_event(self):
        cart = _make_cart()
        _add(cart)
        cart._events.clear()
        cart.update_item_quantity(1, 4)
        assert len(cart._events) == 1
        event = cart._events[0]
        assert isinstance(event, CartQuantityUpdated)
        assert event.previous_quantity == 1
        assert event.new_quantity == 4

    def test_update_to_zero_removes_line(self):
        cart = _make_cart()
        _add(cart)
        cart.update_item_quantity(1, 0)
        assert len(cart.items) == 0

    def test_update_to_negative_removes_line(self):
        cart = _make_cart()
        _add(cart)
        cart.update_item_quantity(1, -3)
        assert len(cart.items) == 0
        assert isinstance(cart._events[-1], CartItemRemoved)

    def test_update_unknown_product_is_a_no_op(self):
        cart = _make_cart()
        _add(cart)
        cart._events.clear()
        cart.update_item_quantity(99, 5)
        assert cart.items[0].quantity == 1
        assert cart._events == []


class TestRemoveItem:
    def test_remove_item(self):
        cart = _make_cart()
        _add(cart, product_id=1)
        _add(cart, product_id=2, name="Baguette")
        cart.remove_item(1)
        assert [item.product_id for item in cart.items] == [2]

    def test_remove_raises_event(self):
        cart = _make_cart()
        _add(cart)
        cart.remove_item(1)
        event = cart._events[-1]
        assert isinstance(event, CartItemRemoved)
        assert event.product_id == 1

    def test_remove_absent_product_is_a_no_op(self):
        cart = _make_cart()
        _add(cart)
        cart._events.clear()
        cart.remove_item(42)
        assert len(cart.items) == 1
        assert cart._events == []


class TestClear:
    def test_clear_empties_cart(self):
        cart = _make_cart()
        _add(cart, product_id=1)
        _add(cart, product_id=2)
        cart.clear()
        assert len(cart.items) == 0
        assert cart.subtotal == 0
        assert cart.item_count == 0

    def test_clear_raises_event(self):
        cart = _make_cart()
        _add(cart, product_id=1)
        _add(cart, product_id=2)
        cart.clear()
        event = cart._events[-1]
        assert isinstance(event, CartCleared)
        assert event.lines_removed == 2


class TestDerivedValues:
    def test_subtotal_is_sum_of_price_times_quantity(self):
        cart = _make_cart()
        _add(cart, product_id=1, unit_price=1000)
        _add(cart, product_id=1, unit_price=1000)
        _add(cart, product_id=2, unit_price=550)
        assert cart.subtotal == 2550

    def test_item_count_is_sum_of_quantities(self):
        cart = _make_cart()
        _add(cart, product_id=1)
        _add(cart, product_id=1)
        _add(cart, product_id=2)
        assert cart.item_count == 3

    def test_line_exposes_decimal_price(self):
        cart = _make_cart()
        _add(cart, unit_price=1050)
        assert cart.items[0].price == Decimal("10.50")
        assert cart.items[0].to_storage()["price"] == "10.50"


class TestRestoreLine:
    def test_restore_does_not_raise_events(self):
        cart = _make_cart()
        cart.restore_line(product_id=1, name="Sourdough Loaf", unit_price=1000, quantity=2)
        assert cart.items[0].quantity == 2
        assert cart._events == []

    def test_restore_folds_duplicate_rows(self):
        cart = _make_cart()
        cart.restore_line(product_id=1, name="Sourdough Loaf", unit_price=1000, quantity=2)
        cart.restore_line(product_id=1, name="Sourdough Loaf", unit_price=1000, quantity=3)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 5
