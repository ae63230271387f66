"""Pricing engine: turns cart items into authoritative order figures.

Pure and deterministic: no I/O, no clock, no randomness. All amounts are
integers in the smallest currency unit, and tax is floored rather than
rounded. Input is assumed to be validated already.
"""

from collections.abc import Sequence
from dataclasses import dataclass

TAX_RATE_PERCENT = 8


@dataclass(frozen=True)
class CartItem:
    """A line of the incoming cart, as supplied by the caller."""

    product_id: str
    name: str
    unit_price: int
    quantity: int


@dataclass(frozen=True)
class PricedLineItem:
    product_id: str
    name: str
    unit_price: int
    quantity: int
    line_total: int


@dataclass(frozen=True)
class PricingResult:
    items: tuple[PricedLineItem, ...]
    subtotal: int
    tax: int
    total: int


def calculate_tax(subtotal: int) -> int:
    """Flat-rate tax on the subtotal, floored to the smallest currency unit."""
    return subtotal * TAX_RATE_PERCENT // 100


def calculate_pricing(items: Sequence[CartItem]) -> PricingResult:
    priced = tuple(
        PricedLineItem(
            product_id=item.product_id,
            name=item.name,
            unit_price=item.unit_price,
            quantity=item.quantity,
            line_total=item.unit_price * item.quantity,
        )
        for item in items
    )

    subtotal = sum(line.line_total for line in priced)
    tax = calculate_tax(subtotal)

    return PricingResult(items=priced, subtotal=subtotal, tax=tax, total=subtotal + tax)
