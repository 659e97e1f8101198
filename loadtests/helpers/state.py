"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance keeps its own state. IDs returned by creation
endpoints are stored so follow-up requests can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks one simulated shopper from browsing to a paid order."""

    user_id: str | None = None
    product_ids: list[str] = field(default_factory=list)
    cart: dict | None = None
    address: dict | None = None
    order_id: str | None = None


@dataclass
class CartState:
    """Tracks a cart that is built up and then abandoned."""

    user_id: str | None = None
    product_id: str | None = None
    line_count: int = 0
