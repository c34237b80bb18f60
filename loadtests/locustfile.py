"""Storefront Load Testing — Locust entry point.

Usage:
    # All scenarios (web UI):
    locust -f loadtests/locustfile.py

    # Shopper journeys only:
    locust -f loadtests/locustfile.py ShopperUser

    # Flash-sale checkout race (headless):
    locust -f loadtests/locustfile.py FlashSaleUser --headless \
           -u 200 -r 50 -t 60s --csv=results/flash_sale
"""

import logging
import time

from locust import events

# Import all user classes so Locust discovers them
from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.storefront import FLASH_SALE_PRODUCT, FLASH_SALE_STOCK, FlashSaleUser, ShopperUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request."""
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    """Log a marker when load test begins."""
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    print(f"[LOADTEST] Flash sale: {FLASH_SALE_STOCK} units of '{FLASH_SALE_PRODUCT}'")
    print()


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    """Report what is left of the flash-sale stock when the test ends."""
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
    stats = environment.stats.get("PATCH /orders/{id} (flash sale checkout)", "PATCH")
    print(f"[LOADTEST] Flash-sale checkout attempts: {stats.num_requests}")
    print(f"[LOADTEST] Expect exactly {FLASH_SALE_STOCK} to have succeeded; stock must end at 0, never below.")
    print()
