"""Product card — listing and detail view of a product with its category."""

from protean.utils.globals import current_domain

from storefront.category.category import Category
from storefront.product.product import Product


def category_card(category: Category) -> dict:
    return {
        "id": str(category.id),
        "name": category.name,
        "description": category.description,
    }


def product_card(product: Product, category: Category | None = None) -> dict:
    """Render ``product``. Looks the category up unless the caller has it already."""
    if category is None:
        category = current_domain.repository_for(Category).require(product.category_id)
    return {
        "id": str(product.id),
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "stock": product.stock,
        "category": category_card(category),
    }


def product_cards(products) -> list[dict]:
    """Render a page of products, loading each distinct category once."""
    categories = {}
    repo = current_domain.repository_for(Category)
    cards = []
    for product in products:
        key = str(product.category_id)
        if key not in categories:
            categories[key] = repo.require(product.category_id)
        cards.append(product_card(product, categories[key]))
    return cards
