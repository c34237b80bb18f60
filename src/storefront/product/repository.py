"""Repository for the Product aggregate."""

from protean.exceptions import ObjectNotFoundError

from storefront.domain import storefront
from storefront.product.product import Product
from storefront.shared.errors import ProductNotFound


@storefront.repository(part_of=Product)
class ProductRepository:
    def require(self, product_id) -> Product:
        try:
            return self.get(product_id)
        except ObjectNotFoundError:
            raise ProductNotFound({"product_id": [f"No product with id '{product_id}' exists."]}) from None

    def find_by_name(self, name) -> Product | None:
        products = self._dao.query.filter(name=name).all().items
        return products[0] if products else None

    def require_by_name(self, name) -> Product:
        product = self.find_by_name(name)
        if product is None:
            raise ProductNotFound({"product_name": ["Product does not exist."]})
        return product

    def in_category(self, category_id=None):
        """Query for products, optionally in one category, ordered by name."""
        query = self._dao.query
        if category_id is not None:
            query = query.filter(category_id=category_id)
        return query.order_by("name")

    def priced_between(self, min_price, max_price):
        """Query for products with ``min_price <= price <= max_price``, cheapest first."""
        return self._dao.query.filter(price__gte=min_price, price__lte=max_price).order_by("price")
