"""Repository for the Category aggregate."""

from protean.exceptions import ObjectNotFoundError

from storefront.category.category import Category
from storefront.domain import storefront
from storefront.shared.errors import BusinessRuleViolation, CategoryNotFound


@storefront.repository(part_of=Category)
class CategoryRepository:
    def require(self, category_id) -> Category:
        try:
            return self.get(category_id)
        except ObjectNotFoundError:
            raise CategoryNotFound({"category_id": [f"No category with id '{category_id}' exists."]}) from None

    def find_by_name(self, name) -> Category | None:
        categories = self._dao.query.filter(name=name).all().items
        return categories[0] if categories else None

    def require_by_name(self, name) -> Category:
        """Resolve a category named in a product payload.

        A missing category here is a rejected request, not a missing resource.
        """
        category = self.find_by_name(name)
        if category is None:
            raise BusinessRuleViolation({"category": ["Category does not exist."]})
        return category

    def all_by_name(self) -> list[Category]:
        return list(self._dao.query.order_by("name").all().items)
