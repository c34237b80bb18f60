"""FastAPI routes for customers, the catalogue, carts and orders.

Writes go through Protean commands processed synchronously; each one runs in
its own Unit of Work. Responses are rendered from the projections after the
command commits.
"""

import json

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    CartItemRequest,
    CreateCategoryRequest,
    CreateCustomerRequest,
    CreateProductRequest,
    UpdateCustomerRequest,
    UpdateOrderRequest,
    UpdateProductRequest,
)
from storefront.category.category import Category
from storefront.category.management import CreateCategory
from storefront.customer.customer import Customer
from storefront.customer.profile import UpdateCustomer
from storefront.customer.registration import RegisterCustomer
from storefront.order.cart import GetOrCreateCart
from storefront.order.items import CreateOrUpdateCartItem
from storefront.order.order import Order
from storefront.order.status import UpdateOrder
from storefront.product.creation import CreateProduct
from storefront.product.details import UpdateProduct
from storefront.product.product import Product
from storefront.projections.customer_card import customer_card
from storefront.projections.order_detail import order_details
from storefront.projections.product_card import category_card, product_card, product_cards
from storefront.shared.paging import paginate

customer_router = APIRouter(prefix="/customers", tags=["customers"])
category_router = APIRouter(prefix="/categories", tags=["categories"])
product_router = APIRouter(prefix="/products", tags=["products"])
order_router = APIRouter(prefix="/orders", tags=["orders"])

_DEFAULTS = {
    "default_page_size": 10,
    "by_price_page_size": 25,
    "by_price_min": 0,
    "by_price_max": 10000,
}


def _setting(name):
    """Read a ``[custom]`` value from domain.toml, falling back to the built-in default."""
    custom = current_domain.config.get("custom") or {}
    return custom.get(name, _DEFAULTS[name])


def _dump(model) -> str | None:
    return json.dumps(model.model_dump()) if model is not None else None


def _order_response(order_id, status_code=200):
    order = current_domain.repository_for(Order).require(order_id)
    return JSONResponse(status_code=status_code, content=order_details(order))


# --- Customer endpoints ---


@customer_router.post("", status_code=201)
async def create_customer(body: CreateCustomerRequest):
    command = RegisterCustomer(
        name=body.name,
        email=body.email,
        address=_dump(body.address),
    )
    customer_id = current_domain.process(command, asynchronous=False)
    customer = current_domain.repository_for(Customer).require(customer_id)
    return JSONResponse(status_code=201, content=customer_card(customer))


@customer_router.get("/{customer_id}")
async def get_customer(customer_id: str):
    customer = current_domain.repository_for(Customer).require(customer_id)
    return JSONResponse(status_code=200, content=customer_card(customer))


@customer_router.patch("/{customer_id}")
async def update_customer(customer_id: str, body: UpdateCustomerRequest):
    command = UpdateCustomer(
        customer_id=customer_id,
        name=body.name,
        email=body.email,
        address=_dump(body.address),
    )
    current_domain.process(command, asynchronous=False)
    customer = current_domain.repository_for(Customer).require(customer_id)
    return JSONResponse(status_code=200, content=customer_card(customer))


@customer_router.get("/{customer_id}/orders")
async def list_customer_orders(customer_id: str, page_size: int | None = None, next_token: str | None = None):
    customer = current_domain.repository_for(Customer).require(customer_id)
    page = paginate(
        current_domain.repository_for(Order).for_customer(customer.id),
        page_size if page_size is not None else _setting("default_page_size"),
        next_token,
    )
    return JSONResponse(
        status_code=200,
        content={
            "results": [order_details(order) for order in page.results],
            "next_token": page.next_token,
        },
    )


@customer_router.post("/{customer_id}/cart")
async def get_or_create_cart(customer_id: str):
    order_id = current_domain.process(GetOrCreateCart(customer_id=customer_id), asynchronous=False)
    return _order_response(order_id)


@customer_router.get("/{customer_id}/cart")
async def get_cart(customer_id: str):
    customer = current_domain.repository_for(Customer).require(customer_id)
    cart = current_domain.repository_for(Order).require_cart_for(customer.id)
    return JSONResponse(status_code=200, content=order_details(cart))


@customer_router.post("/{customer_id}/cart/item")
async def set_cart_item(customer_id: str, body: CartItemRequest):
    command = CreateOrUpdateCartItem(
        customer_id=customer_id,
        product_name=body.product_name,
        quantity=body.quantity,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return _order_response(order_id)


# --- Category endpoints ---


@category_router.post("", status_code=201)
async def create_category(body: CreateCategoryRequest):
    command = CreateCategory(name=body.name, description=body.description)
    category_id = current_domain.process(command, asynchronous=False)
    category = current_domain.repository_for(Category).require(category_id)
    return JSONResponse(status_code=201, content=category_card(category))


@category_router.get("")
async def list_categories():
    categories = current_domain.repository_for(Category).all_by_name()
    return JSONResponse(status_code=200, content={"results": [category_card(c) for c in categories]})


# --- Product endpoints ---


@product_router.post("", status_code=201)
async def create_product(body: CreateProductRequest):
    command = CreateProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        stock=body.stock,
        category=body.category,
    )
    product_id = current_domain.process(command, asynchronous=False)
    product = current_domain.repository_for(Product).require(product_id)
    return JSONResponse(status_code=201, content=product_card(product))


@product_router.get("")
async def list_products(category: str | None = None, page_size: int | None = None, next_token: str | None = None):
    category_id = None
    if category is not None:
        category_id = current_domain.repository_for(Category).require_by_name(category).id

    page = paginate(
        current_domain.repository_for(Product).in_category(category_id),
        page_size if page_size is not None else _setting("default_page_size"),
        next_token,
    )
    return JSONResponse(
        status_code=200,
        content={"results": product_cards(page.results), "next_token": page.next_token},
    )


@product_router.get("/by-price")
async def list_products_by_price(
    min_price: int | None = None,
    max_price: int | None = None,
    page_size: int | None = None,
    next_token: str | None = None,
):
    page = paginate(
        current_domain.repository_for(Product).priced_between(
            min_price if min_price is not None else _setting("by_price_min"),
            max_price if max_price is not None else _setting("by_price_max"),
        ),
        page_size if page_size is not None else _setting("by_price_page_size"),
        next_token,
    )
    return JSONResponse(
        status_code=200,
        content={"results": product_cards(page.results), "next_token": page.next_token},
    )


@product_router.get("/{product_id}")
async def get_product(product_id: str):
    product = current_domain.repository_for(Product).require(product_id)
    return JSONResponse(status_code=200, content=product_card(product))


@product_router.patch("/{product_id}")
async def update_product(product_id: str, body: UpdateProductRequest):
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        stock=body.stock,
        category=body.category,
    )
    current_domain.process(command, asynchronous=False)
    product = current_domain.repository_for(Product).require(product_id)
    return JSONResponse(status_code=200, content=product_card(product))


# --- Order endpoints ---


@order_router.get("/{order_id}")
async def get_order(order_id: str):
    return _order_response(order_id)


@order_router.patch("/{order_id}")
async def update_order(order_id: str, body: UpdateOrderRequest):
    command = UpdateOrder(
        order_id=order_id,
        status=body.status,
        payment=json.dumps(body.payment) if body.payment is not None else None,
    )
    current_domain.process(command, asynchronous=False)
    return _order_response(order_id)
