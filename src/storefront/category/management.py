"""Category management — command and handler."""

from protean import handle
from protean.fields import String, Text
from protean.utils.globals import current_domain

from storefront.category.category import Category
from storefront.domain import storefront
from storefront.shared.errors import UniquenessConflict


@storefront.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)
    description: Text()


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        repo = current_domain.repository_for(Category)
        if repo.find_by_name(command.name) is not None:
            raise UniquenessConflict({"name": ["A category with that name already exists."]})

        category = Category.create(
            name=command.name,
            description=command.description,
        )
        repo.add(category)
        return str(category.id)
