"""Product aggregate root.

Prices are integers in minor currency units (cents) so totals never pick up
floating-point error. Stock is a plain non-negative count: adding a product to a
cart only checks it, checkout is the one place that decrements it.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.shared.errors import InsufficientStock


@storefront.aggregate
class Product:
    name: String(required=True, max_length=255, unique=True)
    description: Text(required=True)
    price: Integer(required=True, min_value=1)
    stock: Integer(required=True, min_value=0)
    category_id: Identifier(required=True)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create(cls, name, description, price, stock, category_id):
        from storefront.product.events import ProductCreated

        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description,
            price=price,
            stock=stock,
            category_id=category_id,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=name,
                price=price,
                stock=stock,
                category_id=category_id,
            )
        )
        return product

    def update_details(
        self,
        name=None,
        description=None,
        price=None,
        stock=None,
        category_id=None,
    ):
        from storefront.product.events import ProductDetailsUpdated

        changes = {
            "name": name,
            "description": description,
            "price": price,
            "stock": stock,
            "category_id": category_id,
        }
        for field_name, value in changes.items():
            if value is not None:
                setattr(self, field_name, value)

        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductDetailsUpdated(
                product_id=self.id,
                name=self.name,
                price=self.price,
                stock=self.stock,
                category_id=self.category_id,
            )
        )

    def has_stock_for(self, quantity) -> bool:
        return self.stock >= quantity

    def decrement_stock(self, quantity, order_id=None):
        """Take ``quantity`` units out of stock for a placed order."""
        from storefront.product.events import StockDecremented

        if not self.has_stock_for(quantity):
            raise InsufficientStock(
                {"stock": [f"Product '{self.name}' does not have the requested quantity in stock."]}
            )

        previous_stock = self.stock
        self.stock = previous_stock - quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockDecremented(
                product_id=self.id,
                order_id=order_id,
                quantity=quantity,
                previous_stock=previous_stock,
                new_stock=self.stock,
            )
        )
