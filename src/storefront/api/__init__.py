"""Storefront HTTP API package."""

from storefront.api.errors import register_error_handlers
from storefront.api.routes import category_router, customer_router, order_router, product_router

__all__ = [
    "customer_router",
    "category_router",
    "product_router",
    "order_router",
    "register_error_handlers",
]
