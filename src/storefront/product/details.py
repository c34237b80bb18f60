"""Product detail updates — command and handler."""

from protean import handle
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.category.category import Category
from storefront.domain import storefront
from storefront.product.product import Product
from storefront.shared.errors import UniquenessConflict


@storefront.command(part_of="Product")
class UpdateProduct:
    """Change any of a product's name, description, price, stock or category."""

    product_id: Identifier(required=True)
    name: String(max_length=255)
    description: Text()
    price: Integer(min_value=1)
    stock: Integer(min_value=0)
    category: String(max_length=100)


@storefront.command_handler(part_of=Product)
class UpdateProductHandler:
    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.require(command.product_id)

        category_id = None
        if command.category:
            category_id = current_domain.repository_for(Category).require_by_name(command.category).id

        if command.name and command.name != product.name:
            existing = repo.find_by_name(command.name)
            if existing is not None and str(existing.id) != str(product.id):
                raise UniquenessConflict({"name": ["A product with that name already exists."]})

        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            stock=command.stock,
            category_id=category_id,
        )
        repo.add(product)
        return str(product.id)
