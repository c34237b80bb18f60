"""Customer registration — command and handler."""

import json

import structlog
from protean import handle
from protean.fields import String, Text
from protean.utils.globals import current_domain

from storefront.customer.customer import Customer
from storefront.domain import storefront
from storefront.shared.errors import UniquenessConflict

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Customer")
class RegisterCustomer:
    """Create a new customer account."""

    name: String(required=True, max_length=255)
    email: String(required=True, max_length=254)
    address: Text()  # JSON: {street, city, state, postal_code, country}


@storefront.command_handler(part_of=Customer)
class RegisterCustomerHandler:
    @handle(RegisterCustomer)
    def register_customer(self, command):
        repo = current_domain.repository_for(Customer)
        if repo.find_by_email(command.email) is not None:
            raise UniquenessConflict({"email": ["A customer with that email already exists."]})

        customer = Customer.register(
            name=command.name,
            email=command.email,
            address=json.loads(command.address) if command.address else None,
        )
        repo.add(customer)

        logger.info("Customer registered", customer_id=str(customer.id))
        return str(customer.id)
