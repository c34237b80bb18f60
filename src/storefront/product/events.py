"""Domain events for the Product aggregate."""

from protean.fields import Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    price: Integer(required=True)
    stock: Integer(required=True)
    category_id: Identifier(required=True)


@storefront.event(part_of="Product")
class ProductDetailsUpdated:
    """Any of a product's name, description, price, stock or category changed."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    price: Integer(required=True)
    stock: Integer(required=True)
    category_id: Identifier(required=True)


@storefront.event(part_of="Product")
class StockDecremented:
    """Units of a product left stock because an order was placed."""

    __version__ = 1

    product_id: Identifier(required=True)
    order_id: Identifier()
    quantity: Integer(required=True)
    previous_stock: Integer(required=True)
    new_stock: Integer(required=True)
