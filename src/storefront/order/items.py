"""Setting the quantity of a product in a customer's cart."""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.customer.customer import Customer
from storefront.domain import storefront
from storefront.order.cart import get_or_open_cart
from storefront.order.order import Order
from storefront.product.product import Product
from storefront.shared.errors import BusinessRuleViolation, InsufficientStock

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class CreateOrUpdateCartItem:
    """Make the customer's cart hold exactly ``quantity`` of the named product.

    Opens a cart if the customer has none. Quantity 0 removes the product.
    """

    customer_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    quantity = Integer(required=True)


@storefront.command_handler(part_of=Order)
class CartItemHandler:
    @handle(CreateOrUpdateCartItem)
    def create_or_update_cart_item(self, command):
        customer = current_domain.repository_for(Customer).require(command.customer_id)
        product = current_domain.repository_for(Product).require_by_name(command.product_name)

        if command.quantity < 0:
            raise BusinessRuleViolation({"quantity": ["Quantity must be a non-negative integer."]})
        # Checked only; stock is reserved at checkout
        if not product.has_stock_for(command.quantity):
            raise InsufficientStock({"quantity": ["Product does not have the requested quantity in stock."]})

        cart = get_or_open_cart(customer.id)
        cart.set_item_quantity(product.id, command.quantity)
        current_domain.repository_for(Order).add(cart)

        logger.info(
            "Cart item set",
            order_id=str(cart.id),
            product_id=str(product.id),
            quantity=command.quantity,
        )
        return str(cart.id)
