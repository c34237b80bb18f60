"""Repository for the Customer aggregate."""

from protean.exceptions import ObjectNotFoundError

from storefront.customer.customer import Customer
from storefront.domain import storefront
from storefront.shared.errors import CustomerNotFound


@storefront.repository(part_of=Customer)
class CustomerRepository:
    def require(self, customer_id) -> Customer:
        """Load a customer or raise ``CustomerNotFound``."""
        try:
            return self.get(customer_id)
        except ObjectNotFoundError:
            raise CustomerNotFound({"customer_id": [f"No customer with id '{customer_id}' exists."]}) from None

    def find_by_email(self, email) -> Customer | None:
        customers = self._dao.query.filter(email=email).all().items
        return customers[0] if customers else None
