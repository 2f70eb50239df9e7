"""Shared BDD fixtures and step definitions for the weekly cart."""

import pytest
from ordering.cart.cart import CartState, WeeklyCart
from ordering.cart.management import CartManager
from ordering.cart.store import CartStore
from pytest_bdd import given, parsers, then, when


@pytest.fixture()
def outcome():
    """Container for the result or error of the step under test."""
    return {"result": None, "exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a logged-in shopper with a delivery address", target_fixture="auth_session")
def logged_in_shopper(shopper_with_address):
    return shopper_with_address


@given("an empty weekly cart", target_fixture="manager")
def empty_weekly_cart(storage, auth_session):
    return CartManager(WeeklyCart.create(), CartStore(storage), auth_session)


@given(parsers.cfparse('the shopper adds {qty:d} of "{product_id}"'))
@when(parsers.cfparse('the shopper adds {qty:d} of "{product_id}"'))
def add_product(manager, static_catalogue, qty, product_id):
    manager.add_item(static_catalogue.get_product(product_id), qty)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart total is {total:g}"))
def cart_total_is(manager, total):
    assert manager.get_cart_total() == total


@then(parsers.cfparse("the cart holds {count:d} item"))
def cart_holds_n_item(manager, count):
    assert manager.get_item_count() == count


@then(parsers.cfparse("the cart holds {count:d} items"))
def cart_holds_n_items(manager, count):
    assert manager.get_item_count() == count


@then(parsers.cfparse("the cart has {count:d} line"))
def cart_has_n_line(manager, count):
    assert len(manager.cart.lines) == count


@then(parsers.cfparse("the cart has {count:d} lines"))
def cart_has_n_lines(manager, count):
    assert len(manager.cart.lines) == count


@then("the cart is empty")
def cart_is_empty(manager):
    assert manager.cart.state == CartState.EMPTY
