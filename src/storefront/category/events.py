"""Domain events for the Category aggregate."""

from protean.fields import Identifier, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Category")
class CategoryCreated:
    """A new product category was added to the catalogue."""

    __version__ = 1

    category_id: Identifier(required=True)
    name: String(required=True)
    description: Text()
