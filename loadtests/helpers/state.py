"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state, with no cross-user sharing.
State tracks entity IDs returned by creation endpoints so follow-up
operations can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks state for a single simulated shopper session."""

    token: str | None = None
    product_ids: list[int] = field(default_factory=list)
    cart_item_ids: list[int] = field(default_factory=list)
    order_ids: list[int] = field(default_factory=list)


@dataclass
class ProductState:
    """Tracks state for a single admin-managed product."""

    product_id: int | None = None
    stock_quantity: int = 0


@dataclass
class CheckoutRushState:
    """Tracks outcomes of a shopper racing for a low-stock product."""

    product_id: int | None = None
    placed: int = 0
    rejected: int = 0
