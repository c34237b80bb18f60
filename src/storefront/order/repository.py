"""Repository for the Order aggregate."""

from protean.exceptions import ObjectNotFoundError

from storefront.domain import storefront
from storefront.order.order import Order, OrderStatus
from storefront.shared.errors import CartNotFound, OrderNotFound


@storefront.repository(part_of=Order)
class OrderRepository:
    def require(self, order_id) -> Order:
        """Load an order or raise ``OrderNotFound``."""
        try:
            return self.get(order_id)
        except ObjectNotFoundError:
            raise OrderNotFound({"order_id": [f"No order with id '{order_id}' exists."]}) from None

    def cart_for(self, customer_id) -> Order | None:
        """The customer's open cart, if they have one."""
        carts = (
            self._dao.query.filter(customer_id=str(customer_id), status=OrderStatus.CART.value)
            .order_by("-created_at")
            .all()
            .items
        )
        return carts[0] if carts else None

    def require_cart_for(self, customer_id) -> Order:
        cart = self.cart_for(customer_id)
        if cart is None:
            raise CartNotFound({"customer_id": [f"Customer '{customer_id}' does not have a cart."]})
        return cart

    def for_customer(self, customer_id):
        """Query over every order of a customer, newest first. Includes the cart."""
        return self._dao.query.filter(customer_id=str(customer_id)).order_by("-created_at")
