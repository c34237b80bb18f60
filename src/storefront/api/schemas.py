"""Pydantic request schemas for the Storefront API.

These are the external contracts. Field names are snake_case, and the
camelCase spellings (``productName``, ``postalCode``) are accepted too.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AddressSchema(BaseModel):
    model_config = _CONFIG

    street: str
    city: str
    state: str | None = None
    postal_code: str
    country: str


# ---------------------------------------------------------------------------
# Customers
# ---------------------------------------------------------------------------
class CreateCustomerRequest(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "name": "Valerie Singh",
                    "email": "valerie@example.com",
                    "address": {
                        "street": "12 Harbour Road",
                        "city": "Portland",
                        "state": "OR",
                        "postalCode": "97201",
                        "country": "US",
                    },
                }
            ]
        },
    )

    name: str = Field(..., max_length=255)
    email: str = Field(..., max_length=254)
    address: AddressSchema | None = None


class UpdateCustomerRequest(BaseModel):
    model_config = _CONFIG

    name: str | None = Field(None, max_length=255)
    email: str | None = Field(None, max_length=254)
    address: AddressSchema | None = None


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class CreateCategoryRequest(BaseModel):
    model_config = _CONFIG

    name: str = Field(..., max_length=100)
    description: str | None = None


class CreateProductRequest(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "name": "Pinewood Desk Lamp",
                    "description": "Adjustable arm, warm LED.",
                    "price": 4599,
                    "stock": 40,
                    "category": "lighting",
                }
            ]
        },
    )

    name: str = Field(..., max_length=255)
    description: str
    price: int = Field(..., gt=0)
    stock: int = Field(..., ge=0)
    category: str


class UpdateProductRequest(BaseModel):
    model_config = _CONFIG

    name: str | None = Field(None, max_length=255)
    description: str | None = None
    price: int | None = Field(None, gt=0)
    stock: int | None = Field(None, ge=0)
    category: str | None = None


# ---------------------------------------------------------------------------
# Cart and orders
# ---------------------------------------------------------------------------
class CartItemRequest(BaseModel):
    """Quantity is a target, not an increment. Negative values are rejected by the domain."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={"examples": [{"productName": "Pinewood Desk Lamp", "quantity": 2}]},
    )

    product_name: str
    quantity: int


class UpdateOrderRequest(BaseModel):
    model_config = _CONFIG

    status: Literal["cart", "processing", "shipped", "delivered"] | None = None
    payment: dict[str, Any] | None = None
