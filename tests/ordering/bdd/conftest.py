"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from pytest_bdd import given, parsers, then, when


@pytest.fixture
def outcome():
    return {}


@pytest.fixture
def products_by_name(make_product):
    """One catalogue product per name, so repeated adds hit the same line."""
    products = {}

    def _get(name, price):
        if name not in products:
            products[name] = make_product(id=name.lower().replace(" ", "-"), name=name, price=price)
        return products[name]

    return _get


@given("an empty cart")
def empty_cart(cart_engine):
    cart_engine.restore()


@when(parsers.cfparse('{qty:d} of "{name}" at {price:f} are added to the cart'))
def add_to_cart(cart_engine, products_by_name, qty, name, price):
    cart_engine.add_to_cart(products_by_name(name, price), qty)


@then(parsers.cfparse("the cart has {count:d} line"))
@then(parsers.cfparse("the cart has {count:d} lines"))
def cart_has_lines(cart_engine, count):
    assert len(cart_engine.items) == count


@then(parsers.cfparse("the cart total is {total}"))
def cart_total(cart_engine, total):
    from decimal import Decimal

    assert cart_engine.get_cart_total() == Decimal(total)
