"""Faker-based data generators for Locust load test scenarios.

Payloads match the field names of the API's request schemas and pass the
domain's validation (unique emails and product names, positive prices).
"""

import random
import uuid

from faker import Faker

fake = Faker()

CATEGORIES = ["lighting", "furniture", "kitchen", "garden", "stationery"]


def unique_email() -> str:
    local = fake.user_name()[:20]
    return f"{local}.{uuid.uuid4().hex[:6]}@{fake.free_email_domain()}"


def address_data() -> dict:
    return {
        "street": fake.street_address()[:255],
        "city": fake.city()[:100],
        "state": fake.state_abbr(),
        "postalCode": fake.zipcode()[:20],
        "country": "US",
    }


def customer_data(with_address: bool = True) -> dict:
    payload = {
        "name": fake.name()[:255],
        "email": unique_email(),
    }
    if with_address:
        payload["address"] = address_data()
    return payload


def category_data(name: str | None = None) -> dict:
    return {
        "name": name or random.choice(CATEGORIES),
        "description": fake.sentence(nb_words=6),
    }


def product_data(category: str | None = None, stock: int | None = None, name: str | None = None) -> dict:
    word = fake.word().capitalize()
    return {
        "name": name or f"{word} {fake.color_name()} {uuid.uuid4().hex[:6]}",
        "description": fake.sentence(nb_words=12),
        "price": random.randint(199, 49999),  # cents
        "stock": stock if stock is not None else random.randint(20, 500),
        "category": category or random.choice(CATEGORIES),
    }


def payment_data() -> dict:
    return {
        "type": "card",
        "brand": random.choice(["visa", "mastercard", "amex"]),
        "last4": f"{random.randint(0, 9999):04d}",
        "holder": fake.name(),
    }
