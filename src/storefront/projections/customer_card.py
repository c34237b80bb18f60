"""Customer card — the public view of a customer."""

from storefront.customer.customer import Customer


def _iso(value):
    return value.isoformat() if value else None


def customer_card(customer: Customer) -> dict:
    return {
        "id": str(customer.id),
        "name": customer.name,
        "email": customer.email,
        "address": customer.address.to_dict() if customer.address else None,
        "registered_at": _iso(customer.registered_at),
    }
