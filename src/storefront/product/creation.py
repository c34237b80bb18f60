"""Product creation — command and handler."""

from protean import handle
from protean.fields import Integer, String, Text
from protean.utils.globals import current_domain

from storefront.category.category import Category
from storefront.domain import storefront
from storefront.product.product import Product
from storefront.shared.errors import UniquenessConflict


@storefront.command(part_of="Product")
class CreateProduct:
    """Add a product to the catalogue under an existing category (by name)."""

    name: String(required=True, max_length=255)
    description: Text(required=True)
    price: Integer(required=True, min_value=1)
    stock: Integer(required=True, min_value=0)
    category: String(required=True, max_length=100)


@storefront.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        category = current_domain.repository_for(Category).require_by_name(command.category)

        repo = current_domain.repository_for(Product)
        if repo.find_by_name(command.name) is not None:
            raise UniquenessConflict({"name": ["A product with that name already exists."]})

        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            stock=command.stock,
            category_id=category.id,
        )
        repo.add(product)
        return str(product.id)
