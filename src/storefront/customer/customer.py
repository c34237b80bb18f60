"""Customer aggregate root with its shipping Address value object."""

from datetime import UTC, datetime

from protean.fields import DateTime, String, ValueObject

from storefront.domain import storefront


@storefront.value_object(part_of="Customer")
class Address:
    """Where a customer's orders are shipped.

    Replaced wholesale on update. Checkout refuses to place an order for a
    customer without one.
    """

    street: String(required=True, max_length=255)
    city: String(required=True, max_length=100)
    state: String(max_length=100)
    postal_code: String(required=True, max_length=20)
    country: String(required=True, max_length=100)


@storefront.aggregate
class Customer:
    """A shopper, identified by a system ID and a unique email.

    The customer's cart and past orders are not stored here; they are looked up
    from the Order repository at read time.
    """

    name: String(required=True, max_length=255)
    email: String(required=True, max_length=254, unique=True)
    address: ValueObject(Address)
    registered_at: DateTime()

    @classmethod
    def register(cls, name, email, address=None):
        from storefront.customer.events import CustomerRegistered

        now = datetime.now(UTC)
        customer = cls(
            name=name,
            email=email,
            address=Address(**address) if address else None,
            registered_at=now,
        )
        customer.raise_(
            CustomerRegistered(
                customer_id=customer.id,
                name=name,
                email=email,
                registered_at=now,
            )
        )
        return customer

    def update_details(self, name=None, email=None, address=None):
        from storefront.customer.events import CustomerDetailsUpdated

        if name is not None:
            self.name = name
        if email is not None:
            self.email = email
        if address is not None:
            self.address = Address(**address)

        self.raise_(
            CustomerDetailsUpdated(
                customer_id=self.id,
                name=self.name,
                email=self.email,
                has_address=self.address is not None,
            )
        )

    @property
    def has_address(self) -> bool:
        return self.address is not None
