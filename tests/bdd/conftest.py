"""Shared BDD fixtures and step definitions for checkout."""

import json

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then

from storefront.catalogue.product.management import UpdateProduct
from storefront.catalogue.product.product import Product
from storefront.ordering.cart.cart import ShoppingCart
from storefront.ordering.cart.management import AddToCart
from storefront.ordering.order.order import Order


@pytest.fixture()
def session_id():
    return "sess-bdd-001"


@pytest.fixture()
def user_id():
    return "user-bdd-001"


@pytest.fixture()
def products():
    """Product ids by name."""
    return {}


@pytest.fixture()
def settings():
    return {"compensate_on_failure": True}


@pytest.fixture()
def outcome():
    """Container for the checkout result or the failure it raised."""
    return {"result": None, "exc": None}


def _product(products, name):
    return current_domain.repository_for(Product).get(products[name])


def _only_order():
    [order] = current_domain.repository_for(Order).all_orders()
    return order


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced {price:f} with {stock:d} in stock'))
def _(make_product, products, name, price, stock):
    products[name] = make_product(name=name, price=price, stock=stock)


@given(parsers.cfparse('the cart holds {quantity:d} of "{name}"'))
def _(products, session_id, name, quantity):
    current_domain.process(
        AddToCart(session_id=session_id, product_id=products[name], quantity=quantity),
        asynchronous=False,
    )


@given(parsers.cfparse('"{name}" stock drops to {stock:d}'))
def _(products, name, stock):
    current_domain.process(
        UpdateProduct(product_id=products[name], changes=json.dumps({"stock": stock})),
        asynchronous=False,
    )


@given("the payment provider is unavailable")
def _(fake_gateway):
    fake_gateway.configure(should_succeed=False, failure_reason="Payment provider unavailable")


@given("failed checkouts are not compensated")
def _(settings):
    settings["compensate_on_failure"] = False


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('"{name}" has {stock:d} in stock'))
def _(products, name, stock):
    assert _product(products, name).stock == stock


@then("the cart is empty")
def _(session_id):
    assert current_domain.repository_for(ShoppingCart).find_by_session(session_id).is_empty


@then(parsers.cfparse('the cart still holds {quantity:d} of "{name}"'))
def _(products, session_id, name, quantity):
    cart = current_domain.repository_for(ShoppingCart).find_by_session(session_id)
    assert cart.find_item(products[name]).quantity == quantity


@then(parsers.cfparse("an order totalling {total:f} is pending"))
def _(total):
    order = _only_order()
    assert order.status == "pending"
    assert order.total == pytest.approx(total)


@then(parsers.cfparse("the order is {status}"))
def _(status):
    assert _only_order().status == status
