"""Application tests for checkout: preconditions, stock decrement and atomicity."""

import json
import threading

import pytest
from protean import current_domain
from storefront.domain import storefront
from storefront.order.cart import GetOrCreateCart
from storefront.order.checkout import Checkout
from storefront.order.order import Order, OrderStatus
from storefront.product.product import Product
from storefront.product.repository import ProductRepository
from storefront.shared.errors import (
    BusinessRuleViolation,
    InsufficientStock,
    InvalidStatusTransition,
    OrderNotFound,
)

CARD = {"type": "card", "last4": "4242"}


def _checkout(order_id, payment=CARD, status="processing"):
    return current_domain.process(
        Checkout(
            order_id=order_id,
            status=status,
            payment=json.dumps(payment) if payment else None,
        ),
        asynchronous=False,
    )


def _stock(product_id):
    return current_domain.repository_for(Product).get(product_id).stock


def _order(order_id):
    return current_domain.repository_for(Order).get(order_id)


class TestSuccessfulCheckout:
    def test_moves_to_processing_and_decrements_stock(self, make_customer, make_product, set_cart_item):
        customer_id = make_customer()
        lamp_id = make_product(name="Lamp", stock=10)
        bulb_id = make_product(name="Bulb", stock=4)
        set_cart_item(customer_id, "Lamp", 3)
        order_id = set_cart_item(customer_id, "Bulb", 4)

        _checkout(order_id)

        order = _order(order_id)
        assert order.status == OrderStatus.PROCESSING.value
        assert order.payment_details == CARD
        assert _stock(lamp_id) == 7
        assert _stock(bulb_id) == 0

    def test_stored_payment_is_enough(self, make_customer, make_product, set_cart_item):
        from storefront.order.status import UpdateOrder

        customer_id = make_customer()
        make_product()
        order_id = set_cart_item(customer_id, "Pinewood Desk Lamp", 1)
        current_domain.process(UpdateOrder(order_id=order_id, payment=json.dumps(CARD)), asynchronous=False)

        _checkout(order_id, payment=None)

        assert _order(order_id).payment_details == CARD

    def test_supplied_payment_is_merged_over_stored(self, make_customer, make_product, set_cart_item):
        from storefront.order.status import UpdateOrder

        customer_id = make_customer()
        make_product()
        order_id = set_cart_item(customer_id, "Pinewood Desk Lamp", 1)
        current_domain.process(
            UpdateOrder(order_id=order_id, payment=json.dumps({"type": "card", "holder": "V Singh"})),
            asynchronous=False,
        )

        _checkout(order_id, payment={"last4": "4242"})

        assert _order(order_id).payment_details == {"type": "card", "holder": "V Singh", "last4": "4242"}

    def test_next_item_opens_a_fresh_cart(self, make_customer, make_product, set_cart_item):
        customer_id = make_customer()
        make_product(stock=10)
        order_id = set_cart_item(customer_id, "Pinewood Desk Lamp", 1)
        _checkout(order_id)

        new_cart_id = current_domain.process(GetOrCreateCart(customer_id=customer_id), asynchronous=False)

        assert new_cart_id != order_id
        assert len(_order(new_cart_id).items) == 0


class TestCheckoutPreconditions:
    def test_only_processing_is_accepted(self, make_customer, make_product, set_cart_item):
        customer_id = make_customer()
        make_product()
        order_id = set_cart_item(customer_id, "Pinewood Desk Lamp", 1)

        with pytest.raises(BusinessRuleViolation) as exc:
            _checkout(order_id, status="shipped")
        assert exc.value.messages == {"status": ["Can not call checkout with status other than processing."]}

    def test_unknown_order(self):
        with pytest.raises(OrderNotFound):
            _checkout("missing")

    def test_empty_order(self, make_customer):
        customer_id = make_customer()
        order_id = current_domain.process(GetOrCreateCart(customer_id=customer_id), asynchronous=False)

        with pytest.raises(BusinessRuleViolation) as exc:
            _checkout(order_id)
        assert exc.value.messages == {"items": ["Order must have at least one item."]}

    def test_customer_without_address(self, make_customer, make_product, set_cart_item):
        customer_id = make_customer(address=None)
        product_id = make_product(stock=5)
        order_id = set_cart_item(customer_id, "Pinewood Desk Lamp", 1)

        with pytest.raises(BusinessRuleViolation) as exc:
            _checkout(order_id)
        assert exc.value.messages == {"address": ["Customer must have a valid address."]}
        assert _stock(product_id) == 5

    def test_no_payment_anywhere(self, make_customer, make_product, set_cart_item):
        customer_id = make_customer()
        make_product()
        order_id = set_cart_item(customer_id, "Pinewood Desk Lamp", 1)

        with pytest.raises(BusinessRuleViolation) as exc:
            _checkout(order_id, payment=None)
        assert exc.value.messages == {"payment": ["A payment method must be provided."]}
        assert _order(order_id).status == OrderStatus.CART.value

    def test_checking_out_twice(self, make_customer, make_product, set_cart_item):
        customer_id = make_customer()
        product_id = make_product(stock=5)
        order_id = set_cart_item(customer_id, "Pinewood Desk Lamp", 2)
        _checkout(order_id)

        with pytest.raises(InvalidStatusTransition):
            _checkout(order_id)
        assert _stock(product_id) == 3


class TestCheckoutAtomicity:
    def test_short_stock_on_one_product_changes_nothing(self, make_customer, make_product, set_cart_item):
        from storefront.product.details import UpdateProduct

        customer_id = make_customer()
        lamp_id = make_product(name="Lamp", stock=10)
        bulb_id = make_product(name="Bulb", stock=5)
        set_cart_item(customer_id, "Lamp", 2)
        order_id = set_cart_item(customer_id, "Bulb", 5)
        # Stock drops after the item was added; nothing was reserved
        current_domain.process(UpdateProduct(product_id=bulb_id, stock=4), asynchronous=False)

        with pytest.raises(InsufficientStock) as exc:
            _checkout(order_id)

        assert exc.value.messages == {"stock": ["Product 'Bulb' does not have the requested quantity in stock."]}
        assert _stock(lamp_id) == 10
        assert _stock(bulb_id) == 4
        order = _order(order_id)
        assert order.status == OrderStatus.CART.value
        assert order.payment_details == {}

    def test_two_checkouts_for_the_last_units(self, make_customer, make_product, set_cart_item):
        product_id = make_product(stock=3)
        first_customer = make_customer(email="first@example.com")
        second_customer = make_customer(email="second@example.com")
        first_order = set_cart_item(first_customer, "Pinewood Desk Lamp", 3)
        second_order = set_cart_item(second_customer, "Pinewood Desk Lamp", 3)

        _checkout(first_order)
        with pytest.raises(InsufficientStock):
            _checkout(second_order)

        assert _stock(product_id) == 0
        assert _order(first_order).status == OrderStatus.PROCESSING.value
        assert _order(second_order).status == OrderStatus.CART.value

    def test_interleaved_checkouts_for_the_last_units(self, monkeypatch, make_customer, make_product, set_cart_item):
        product_id = make_product(stock=3)
        first_order = set_cart_item(make_customer(email="first@example.com"), "Pinewood Desk Lamp", 3)
        second_order = set_cart_item(make_customer(email="second@example.com"), "Pinewood Desk Lamp", 3)

        # Hold both checkouts until each has read the product at stock 3
        both_read = threading.Barrier(2, timeout=5)
        waited = set()
        original_require = ProductRepository.require

        def require_then_wait(self, product_id):
            product = original_require(self, product_id)
            if threading.get_ident() not in waited:
                waited.add(threading.get_ident())
                try:
                    both_read.wait()
                except threading.BrokenBarrierError:
                    pass
            return product

        monkeypatch.setattr(ProductRepository, "require", require_then_wait)

        outcomes = {}

        def run(order_id):
            with storefront.domain_context():
                try:
                    _checkout(order_id)
                    outcomes[order_id] = "ok"
                except Exception as exc:
                    outcomes[order_id] = type(exc).__name__

        threads = [threading.Thread(target=run, args=(order_id,)) for order_id in (first_order, second_order)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=10)

        assert sorted(outcomes.values()) == ["InsufficientStock", "ok"]
        assert _stock(product_id) == 0
        winner = next(order_id for order_id, outcome in outcomes.items() if outcome == "ok")
        loser = first_order if winner == second_order else second_order
        assert _order(winner).status == OrderStatus.PROCESSING.value
        assert _order(loser).status == OrderStatus.CART.value
        assert _order(loser).payment_details == {}
