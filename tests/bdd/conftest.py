"""Shared BDD fixtures and Given steps for the checkout journey."""

import json

import pytest
from protean import current_domain
from pytest_bdd import given, parsers
from storefront.category.category import Category
from storefront.category.management import CreateCategory
from storefront.customer.registration import RegisterCustomer
from storefront.order.cart import GetOrCreateCart
from storefront.order.checkout import Checkout
from storefront.order.items import CreateOrUpdateCartItem
from storefront.product.creation import CreateProduct

ADDRESS = {
    "street": "12 Harbour Road",
    "city": "Portland",
    "state": "OR",
    "postal_code": "97201",
    "country": "US",
}
CARD = {"type": "card", "last4": "4242"}


def _register(email, address):
    return current_domain.process(
        RegisterCustomer(
            name="Shopper",
            email=email,
            address=json.dumps(address) if address else None,
        ),
        asynchronous=False,
    )


def _set_item(customer_id, product_name, quantity):
    return current_domain.process(
        CreateOrUpdateCartItem(customer_id=customer_id, product_name=product_name, quantity=quantity),
        asynchronous=False,
    )


@pytest.fixture
def cart():
    """Holds the id of the cart the scenario is checking out."""
    return {}


@given("a customer with a shipping address", target_fixture="customer_id")
def _():
    return _register("shopper@example.com", ADDRESS)


@given("a customer without a shipping address", target_fixture="customer_id")
def _():
    return _register("shopper@example.com", None)


@given(parsers.parse('a product "{name}" priced {price:d} with {stock:d} in stock'))
def _(name, price, stock):
    if current_domain.repository_for(Category).find_by_name("general") is None:
        current_domain.process(CreateCategory(name="general"), asynchronous=False)
    current_domain.process(
        CreateProduct(name=name, description=name, price=price, stock=stock, category="general"),
        asynchronous=False,
    )


@given(parsers.parse('the customer\'s cart holds {quantity:d} of "{name}"'))
def _(customer_id, cart, quantity, name):
    cart["id"] = _set_item(customer_id, name, quantity)


@given("the customer has an empty cart")
def _(customer_id, cart):
    cart["id"] = current_domain.process(GetOrCreateCart(customer_id=customer_id), asynchronous=False)


@given(parsers.parse('another customer has bought {quantity:d} of "{name}"'))
def _(quantity, name):
    other_id = _register("someone.else@example.com", ADDRESS)
    order_id = _set_item(other_id, name, quantity)
    current_domain.process(
        Checkout(order_id=order_id, payment=json.dumps(CARD)),
        asynchronous=False,
    )
