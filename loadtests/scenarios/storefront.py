"""Storefront load test scenarios.

Two journeys:

- ShopperJourney: register, browse, fill a cart, pay, check out, then walk the
  order through shipping and delivery.
- FlashSaleJourney: many buyers race to check out the last units of one
  product. Exactly ``FLASH_SALE_STOCK`` checkouts should succeed; every other
  buyer must get the insufficient-stock rejection, never a 500.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    CATEGORIES,
    category_data,
    customer_data,
    payment_data,
    product_data,
)
from loadtests.helpers.response import extract_error_detail, is_insufficient_stock
from loadtests.helpers.state import FlashSaleState, ShopperState

FLASH_SALE_CATEGORY = "flash-sale"
FLASH_SALE_PRODUCT = "Flash Sale Lantern"
FLASH_SALE_STOCK = 50


def _ensure_category(client, name):
    with client.post(
        "/categories",
        json=category_data(name),
        catch_response=True,
        name="POST /categories",
    ) as resp:
        if resp.status_code in (201, 409):
            resp.success()
        else:
            resp.failure(f"Create category failed: {resp.status_code} — {extract_error_detail(resp)}")


class ShopperJourney(SequentialTaskSet):
    """Register -> Browse -> Set Items -> Pay -> Checkout -> Ship -> Deliver."""

    def on_start(self):
        self.state = ShopperState()

    @task
    def register(self):
        with self.client.post(
            "/customers",
            json=customer_data(),
            catch_response=True,
            name="POST /customers",
        ) as resp:
            if resp.status_code == 201:
                self.state.customer_id = resp.json()["id"]
            else:
                resp.failure(f"Register failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def stock_the_shelves(self):
        category = random.choice(CATEGORIES)
        _ensure_category(self.client, category)
        with self.client.post(
            "/products",
            json=product_data(category=category),
            catch_response=True,
            name="POST /products",
        ) as resp:
            if resp.status_code != 201:
                resp.failure(f"Create product failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def browse(self):
        with self.client.get(
            "/products/by-price",
            params={"page_size": 10},
            catch_response=True,
            name="GET /products/by-price",
        ) as resp:
            if resp.status_code == 200:
                in_stock = [p["name"] for p in resp.json()["results"] if p["stock"] > 0]
                self.state.product_names = random.sample(in_stock, min(3, len(in_stock)))
            else:
                resp.failure(f"Browse failed: {resp.status_code} — {extract_error_detail(resp)}")
        if not self.state.product_names:
            self.interrupt()

    @task
    def fill_cart(self):
        for name in self.state.product_names:
            with self.client.post(
                f"/customers/{self.state.customer_id}/cart/item",
                json={"productName": name, "quantity": 1},
                catch_response=True,
                name="POST /customers/{id}/cart/item",
            ) as resp:
                if resp.status_code == 200:
                    self.state.order_id = resp.json()["id"]
                elif is_insufficient_stock(resp):
                    resp.success()
                else:
                    resp.failure(f"Set cart item failed: {resp.status_code} — {extract_error_detail(resp)}")
        if self.state.order_id is None:
            self.interrupt()

    @task
    def pay(self):
        with self.client.patch(
            f"/orders/{self.state.order_id}",
            json={"payment": payment_data()},
            catch_response=True,
            name="PATCH /orders/{id} (payment)",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Payment failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def checkout(self):
        with self.client.patch(
            f"/orders/{self.state.order_id}",
            json={"status": "processing"},
            catch_response=True,
            name="PATCH /orders/{id} (checkout)",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_status = "processing"
            elif is_insufficient_stock(resp):
                resp.success()
                self.interrupt()
            else:
                resp.failure(f"Checkout failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def ship(self):
        self._advance("shipped")

    @task
    def deliver(self):
        self._advance("delivered")

    @task
    def review_history(self):
        with self.client.get(
            f"/customers/{self.state.customer_id}/orders",
            catch_response=True,
            name="GET /customers/{id}/orders",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Order history failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()

    def _advance(self, status):
        with self.client.patch(
            f"/orders/{self.state.order_id}",
            json={"status": status},
            catch_response=True,
            name=f"PATCH /orders/{{id}} ({status})",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_status = status
            else:
                resp.failure(f"Move to {status} failed: {resp.status_code} — {extract_error_detail(resp)}")


class FlashSaleJourney(SequentialTaskSet):
    """Register -> Put the flash-sale product in the cart -> Checkout.

    The cart only checks stock, so many buyers can hold the last units at
    once. Checkout is where they race.
    """

    def on_start(self):
        self.state = FlashSaleState()
        _ensure_category(self.client, FLASH_SALE_CATEGORY)
        with self.client.post(
            "/products",
            json=product_data(category=FLASH_SALE_CATEGORY, stock=FLASH_SALE_STOCK, name=FLASH_SALE_PRODUCT),
            catch_response=True,
            name="POST /products (flash sale)",
        ) as resp:
            if resp.status_code in (201, 409):
                resp.success()
            else:
                resp.failure(f"Create flash-sale product failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def register(self):
        with self.client.post(
            "/customers",
            json=customer_data(),
            catch_response=True,
            name="POST /customers",
        ) as resp:
            if resp.status_code == 201:
                self.state.customer_id = resp.json()["id"]
            else:
                resp.failure(f"Register failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def grab(self):
        with self.client.post(
            f"/customers/{self.state.customer_id}/cart/item",
            json={"productName": FLASH_SALE_PRODUCT, "quantity": 1},
            catch_response=True,
            name="POST /customers/{id}/cart/item (flash sale)",
        ) as resp:
            if resp.status_code == 200:
                self.state.order_id = resp.json()["id"]
            elif is_insufficient_stock(resp):
                # Sold out before this buyer reached the cart
                resp.success()
                self.interrupt()
            else:
                resp.failure(f"Grab failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def checkout(self):
        with self.client.patch(
            f"/orders/{self.state.order_id}",
            json={"status": "processing", "payment": payment_data()},
            catch_response=True,
            name="PATCH /orders/{id} (flash sale checkout)",
        ) as resp:
            if resp.status_code == 200:
                self.state.won = True
            elif is_insufficient_stock(resp):
                resp.success()
            else:
                resp.failure(f"Flash-sale checkout failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class ShopperUser(HttpUser):
    """Full shopper journey with realistic pauses."""

    tasks = [ShopperJourney]
    wait_time = between(1, 3)


class FlashSaleUser(HttpUser):
    """Buyers hammering one product with almost no think time."""

    tasks = [FlashSaleJourney]
    wait_time = between(0.05, 0.2)
