"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance keeps its own state; nothing is shared across users.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks one simulated shopper from registration to delivery."""

    customer_id: str | None = None
    order_id: str | None = None
    product_names: list[str] = field(default_factory=list)
    current_status: str = "cart"


@dataclass
class FlashSaleState:
    """Tracks one buyer racing for the flash-sale product."""

    customer_id: str | None = None
    order_id: str | None = None
    won: bool = False
