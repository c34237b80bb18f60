"""Tests for the Customer aggregate and its Address."""

from storefront.customer.customer import Customer
from storefront.customer.events import CustomerDetailsUpdated, CustomerRegistered

ADDRESS = {
    "street": "12 Harbour Road",
    "city": "Portland",
    "state": "OR",
    "postal_code": "97201",
    "country": "US",
}


class TestRegistration:
    def test_register_without_address(self):
        customer = Customer.register(name="Valerie Singh", email="valerie@example.com")

        assert customer.address is None
        assert not customer.has_address
        assert isinstance(customer._events[0], CustomerRegistered)

    def test_register_with_address(self):
        customer = Customer.register(name="Valerie Singh", email="valerie@example.com", address=ADDRESS)

        assert customer.has_address
        assert customer.address.city == "Portland"


class TestUpdateDetails:
    def test_address_added_later(self):
        customer = Customer.register(name="Valerie Singh", email="valerie@example.com")
        customer.update_details(address=ADDRESS)

        assert customer.has_address
        event = customer._events[-1]
        assert isinstance(event, CustomerDetailsUpdated)
        assert event.has_address is True

    def test_unsupplied_fields_are_kept(self):
        customer = Customer.register(name="Valerie Singh", email="valerie@example.com", address=ADDRESS)
        customer.update_details(name="Val Singh")

        assert customer.name == "Val Singh"
        assert customer.email == "valerie@example.com"
        assert customer.address.postal_code == "97201"
