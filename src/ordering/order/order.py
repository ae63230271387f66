"""Order aggregate: the single durable record produced by a checkout.

An Order is created exactly once per cart identifier and never changes
afterwards. Every later request for the same cart reads it back as-is.

Money fields are integers in the smallest currency unit (cents). The wire
and persisted layout is the camelCase record returned by ``to_record()``.
"""

from datetime import datetime
from enum import Enum

from protean.fields import DateTime, HasMany, Identifier, Integer, String, Text

from ordering.domain import ordering


class OrderStatus(Enum):
    CONFIRMED = "CONFIRMED"


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderLine:
    """A priced line of the order, in the position it had in the cart."""

    product_id = Text(required=True, sanitize=False)
    name = Text(required=True, sanitize=False)
    unit_price = Integer(required=True, min_value=1)
    quantity = Integer(required=True, min_value=1)
    line_total = Integer(required=True, min_value=1)

    def to_record(self):
        return {
            "productId": self.product_id,
            "name": self.name,
            "unitPrice": self.unit_price,
            "quantity": self.quantity,
            "lineTotal": self.line_total,
        }


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    order_id = Identifier(identifier=True, required=True)
    cart_id = Identifier(required=True)
    customer_id = Text(required=True, sanitize=False)
    items = HasMany(OrderLine)
    subtotal = Integer(required=True, min_value=0)
    tax = Integer(required=True, min_value=0)
    total = Integer(required=True, min_value=0)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.CONFIRMED.value,
    )
    created_at = DateTime(required=True)

    # -------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, *, order_id, cart_id, customer_id, pricing, created_at):
        """Build a confirmed order from server-side pricing.

        Args:
            order_id: Freshly generated order identifier.
            cart_id: The idempotency key the order is stored under.
            customer_id: Opaque caller-supplied customer reference.
            pricing: A ``PricingResult`` for the cart.
            created_at: Creation timestamp, fixed for the life of the order.
        """
        return cls(
            order_id=order_id,
            cart_id=cart_id,
            customer_id=customer_id,
            items=[
                OrderLine(
                    product_id=line.product_id,
                    name=line.name,
                    unit_price=line.unit_price,
                    quantity=line.quantity,
                    line_total=line.line_total,
                )
                for line in pricing.items
            ],
            subtotal=pricing.subtotal,
            tax=pricing.tax,
            total=pricing.total,
            status=OrderStatus.CONFIRMED.value,
            created_at=created_at,
        )

    @classmethod
    def from_record(cls, record):
        """Rebuild an Order from its persisted camelCase record."""
        created_at = record["createdAt"]
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)

        return cls(
            order_id=record["orderId"],
            cart_id=record["cartId"],
            customer_id=record["customerId"],
            items=[
                OrderLine(
                    product_id=item["productId"],
                    name=item["name"],
                    unit_price=item["unitPrice"],
                    quantity=item["quantity"],
                    line_total=item["lineTotal"],
                )
                for item in record["items"]
            ],
            subtotal=record["subtotal"],
            tax=record["tax"],
            total=record["total"],
            status=record["status"],
            created_at=created_at,
        )

    # -------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------
    def to_record(self):
        return {
            "orderId": str(self.order_id),
            "cartId": str(self.cart_id),
            "customerId": self.customer_id,
            "items": [line.to_record() for line in self.items],
            "subtotal": self.subtotal,
            "tax": self.tax,
            "total": self.total,
            "status": self.status,
            "createdAt": self.created_at.isoformat(),
        }
