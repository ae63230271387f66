"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state; nothing is shared
across users. State keeps the request body and the order id returned by
the first checkout so retries can be compared against it.
"""

from dataclasses import dataclass, field


@dataclass
class CheckoutState:
    """Tracks one cart through its first checkout and its retries."""

    body: dict = field(default_factory=dict)
    order_id: str | None = None
    total: int | None = None
    retries: int = 0
