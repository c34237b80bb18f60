"""Category aggregate root for grouping products."""

from datetime import UTC, datetime

from protean.fields import DateTime, String, Text

from storefront.domain import storefront


@storefront.aggregate
class Category:
    """A named grouping of products in the catalogue. Names are unique."""

    name: String(required=True, max_length=100, unique=True)
    description: Text()
    created_at: DateTime()

    @classmethod
    def create(cls, name, description=None):
        from storefront.category.events import CategoryCreated

        now = datetime.now(UTC)
        category = cls(
            name=name,
            description=description,
            created_at=now,
        )
        category.raise_(
            CategoryCreated(
                category_id=category.id,
                name=name,
                description=description,
            )
        )
        return category
