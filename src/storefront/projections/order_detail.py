"""Order detail — an order with its items, products, customer and total.

The total is never stored. It is recomputed from the current product prices
every time the order is rendered, so a price change after checkout changes the
total reported for already-placed orders too.
"""

from protean.utils.globals import current_domain

from storefront.customer.customer import Customer
from storefront.order.order import Order
from storefront.product.product import Product
from storefront.projections.customer_card import customer_card
from storefront.projections.product_card import product_card


def _iso(value):
    return value.isoformat() if value else None


def _products_for(order: Order) -> dict[str, Product]:
    repo = current_domain.repository_for(Product)
    return {str(item.product_id): repo.require(item.product_id) for item in order.items}


def order_total(order: Order, products: dict[str, Product] | None = None) -> int:
    """Sum of quantity × current unit price over the order's items."""
    if products is None:
        products = _products_for(order)
    return sum(item.quantity * products[str(item.product_id)].price for item in order.items)


def order_details(order: Order) -> dict:
    products = _products_for(order)
    customer = current_domain.repository_for(Customer).require(order.customer_id)

    return {
        "id": str(order.id),
        "status": order.status,
        "created_at": _iso(order.created_at),
        "placed_at": _iso(order.placed_at),
        "payment": order.payment_details,
        "total": order_total(order, products),
        "items": [
            {
                "id": str(item.id),
                "quantity": item.quantity,
                "product": product_card(products[str(item.product_id)]),
            }
            for item in order.items
        ],
        "customer": customer_card(customer),
    }
