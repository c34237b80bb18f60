import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from storefront.api import (
    category_router,
    customer_router,
    order_router,
    product_router,
    register_error_handlers,
)


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(customer_router)
    app.include_router(category_router)
    app.include_router(product_router)
    app.include_router(order_router)
    register_error_handlers(app)
    return TestClient(app)


@pytest.fixture()
def customer(client):
    response = client.post(
        "/customers",
        json={
            "name": "Valerie Singh",
            "email": "valerie@example.com",
            "address": {
                "street": "12 Harbour Road",
                "city": "Portland",
                "state": "OR",
                "postalCode": "97201",
                "country": "US",
            },
        },
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture()
def lamp(client):
    client.post("/categories", json={"name": "lighting", "description": "Lamps and bulbs"})
    response = client.post(
        "/products",
        json={
            "name": "Pinewood Desk Lamp",
            "description": "Warm LED lamp",
            "price": 500,
            "stock": 5,
            "category": "lighting",
        },
    )
    assert response.status_code == 201
    return response.json()
