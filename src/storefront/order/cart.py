"""Cart lookup — get the customer's cart, opening one if they have none."""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.customer.customer import Customer
from storefront.domain import storefront
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


def get_or_open_cart(customer_id) -> Order:
    """Return the customer's cart, adding a new one to the repository if needed.

    Runs inside the caller's Unit of Work so the cart is only persisted if the
    rest of the operation commits.
    """
    customer = current_domain.repository_for(Customer).require(customer_id)

    repo = current_domain.repository_for(Order)
    cart = repo.cart_for(customer.id)
    if cart is None:
        cart = Order.open_cart(customer.id)
        repo.add(cart)
        logger.info("Cart opened", customer_id=str(customer.id), order_id=str(cart.id))
    return cart


@storefront.command(part_of="Order")
class GetOrCreateCart:
    customer_id = Identifier(required=True)


@storefront.command_handler(part_of=Order)
class CartHandler:
    @handle(GetOrCreateCart)
    def get_or_create_cart(self, command):
        return str(get_or_open_cart(command.customer_id).id)
