"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the checkout validation rules
(UUID cart ids, integer cents, quantities of at least one) and match the
camelCase field names the checkout endpoint expects.
"""

import random
import uuid

from faker import Faker

fake = Faker()


def cart_id() -> str:
    """Generate a fresh cart id; the checkout requires a UUID."""
    return str(uuid.uuid4())


def customer_id() -> str:
    """Generate customer ids like 'cust-LT-a1b2c3d4'."""
    return f"cust-LT-{uuid.uuid4().hex[:8]}"


def cart_item() -> dict:
    """Generate one cart line with a whole-cent unit price."""
    return {
        "productId": f"prod-{uuid.uuid4().hex[:8]}",
        "name": fake.catch_phrase()[:80],
        "unitPrice": random.randint(199, 49999),
        "quantity": random.randint(1, 3),
    }


def checkout_data(cart: str | None = None, items: int | None = None) -> dict:
    """Generate a checkout request body for ``cart`` (a new cart if omitted)."""
    return {
        "cartId": cart or cart_id(),
        "customerId": customer_id(),
        "items": [cart_item() for _ in range(items or random.randint(1, 5))],
    }


def invalid_checkout_data() -> dict:
    """Generate a body the checkout rejects with a 400."""
    body = checkout_data()
    kind = random.choice(["empty", "zero_price", "zero_quantity", "bad_cart_id"])
    if kind == "empty":
        body["items"] = []
    elif kind == "zero_price":
        body["items"][0]["unitPrice"] = 0
    elif kind == "zero_quantity":
        body["items"][0]["quantity"] = 0
    else:
        body["cartId"] = fake.word()
    return body
