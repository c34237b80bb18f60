"""Checkout — turn a cart into a placed order.

Every precondition is checked before anything is written, and all writes
(stock decrements on each product plus the order's status and payment) go into
the same Unit of Work. Either the whole checkout commits or none of it does.
"""

import json

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.customer.customer import Customer
from storefront.domain import storefront
from storefront.order.order import Order, OrderStatus, validate_status_transition
from storefront.product.product import Product
from storefront.shared.errors import BusinessRuleViolation, InsufficientStock

logger = structlog.get_logger(__name__)


def checkout(order_id, status=OrderStatus.PROCESSING.value, payment=None) -> Order:
    """Check out ``order_id``, decrementing stock and moving it to processing.

    ``payment`` is an optional dict merged over the payment already stored on
    the cart. Must run inside a Unit of Work.
    """
    if status != OrderStatus.PROCESSING.value:
        raise BusinessRuleViolation({"status": ["Can not call checkout with status other than processing."]})

    orders = current_domain.repository_for(Order)
    order = orders.require(order_id)

    validate_status_transition(order.status, OrderStatus.PROCESSING)

    if not order.items:
        raise BusinessRuleViolation({"items": ["Order must have at least one item."]})

    customer = current_domain.repository_for(Customer).require(order.customer_id)
    if not customer.has_address:
        raise BusinessRuleViolation({"address": ["Customer must have a valid address."]})

    if not (order.payment_details or payment):
        raise BusinessRuleViolation({"payment": ["A payment method must be provided."]})

    products = current_domain.repository_for(Product)
    reserved = []
    for product_id, quantity in order.quantities_by_product().items():
        product = products.require(product_id)
        if not product.has_stock_for(quantity):
            logger.warning(
                "Checkout rejected: insufficient stock",
                order_id=str(order.id),
                product_id=str(product.id),
                requested=quantity,
                available=product.stock,
            )
            raise InsufficientStock(
                {"stock": [f"Product '{product.name}' does not have the requested quantity in stock."]}
            )
        reserved.append((product, quantity))

    for product, quantity in reserved:
        product.decrement_stock(quantity, order_id=str(order.id))
        products.add(product)

    order.place(payment)
    orders.add(order)

    logger.info(
        "Order placed",
        order_id=str(order.id),
        customer_id=str(order.customer_id),
        products=len(reserved),
    )
    return order


@storefront.command(part_of="Order")
class Checkout:
    order_id = Identifier(required=True)
    status = String(default=OrderStatus.PROCESSING.value)
    payment = Text()  # JSON object


@storefront.command_handler(part_of=Order)
class CheckoutHandler:
    @handle(Checkout)
    def checkout(self, command):
        payment = json.loads(command.payment) if command.payment else None
        return str(checkout(command.order_id, command.status, payment).id)
