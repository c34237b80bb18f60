import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Fetch and activate the domain by pushing the associated domain_context. The activated domain can then be referred to elsewhere as `current_domain`
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from storefront.domain import storefront

    storefront.init()
    storefront.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db(request):
    from storefront.domain import storefront
    from storefront.utils.db import drop_db, setup_db

    setup_db(storefront)

    yield

    drop_db(storefront)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    from protean import current_domain

    # Clear all databases
    for _, provider in current_domain.providers.items():
        provider._data_reset()

    # Drain event stores
    current_domain.event_store.store._data_reset()


# ---------------------------------------------------------------------------
# Shared builders, going through the same commands the API uses
# ---------------------------------------------------------------------------
ADDRESS = {
    "street": "12 Harbour Road",
    "city": "Portland",
    "state": "OR",
    "postal_code": "97201",
    "country": "US",
}


@pytest.fixture
def make_customer():
    import json

    from protean import current_domain

    from storefront.customer.registration import RegisterCustomer

    def _make(name="Valerie Singh", email="valerie@example.com", address=ADDRESS):
        return current_domain.process(
            RegisterCustomer(
                name=name,
                email=email,
                address=json.dumps(address) if address else None,
            ),
            asynchronous=False,
        )

    return _make


@pytest.fixture
def make_category():
    from protean import current_domain

    from storefront.category.management import CreateCategory

    def _make(name="lighting", description="Lamps and bulbs"):
        return current_domain.process(CreateCategory(name=name, description=description), asynchronous=False)

    return _make


@pytest.fixture
def make_product(make_category):
    from protean import current_domain

    from storefront.category.category import Category
    from storefront.product.creation import CreateProduct

    def _make(name="Pinewood Desk Lamp", price=500, stock=10, category="lighting", description="Warm LED lamp"):
        if current_domain.repository_for(Category).find_by_name(category) is None:
            make_category(name=category)
        return current_domain.process(
            CreateProduct(
                name=name,
                description=description,
                price=price,
                stock=stock,
                category=category,
            ),
            asynchronous=False,
        )

    return _make


@pytest.fixture
def set_cart_item():
    from protean import current_domain

    from storefront.order.items import CreateOrUpdateCartItem

    def _set(customer_id, product_name, quantity):
        return current_domain.process(
            CreateOrUpdateCartItem(customer_id=customer_id, product_name=product_name, quantity=quantity),
            asynchronous=False,
        )

    return _set
