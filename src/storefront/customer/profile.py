"""Customer detail updates — command and handler."""

import json

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.customer.customer import Customer
from storefront.domain import storefront
from storefront.shared.errors import UniquenessConflict


@storefront.command(part_of="Customer")
class UpdateCustomer:
    """Change any of a customer's name, email and shipping address."""

    customer_id: Identifier(required=True)
    name: String(max_length=255)
    email: String(max_length=254)
    address: Text()  # JSON: {street, city, state, postal_code, country}


@storefront.command_handler(part_of=Customer)
class UpdateCustomerHandler:
    @handle(UpdateCustomer)
    def update_customer(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.require(command.customer_id)

        if command.email and command.email != customer.email:
            existing = repo.find_by_email(command.email)
            if existing is not None and str(existing.id) != str(customer.id):
                raise UniquenessConflict({"email": ["A customer with that email already exists."]})

        customer.update_details(
            name=command.name,
            email=command.email,
            address=json.loads(command.address) if command.address else None,
        )
        repo.add(customer)
        return str(customer.id)
