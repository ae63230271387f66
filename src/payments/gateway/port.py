"""Payment gateway port (abstract interface).

Defines the capture contract the checkout depends on. Swapping between
FakeGateway (dev/test) and a provider adapter needs no change to the
ordering code.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class CaptureResult:
    """Result of a payment capture attempt."""

    success: bool
    transaction_id: str | None = None
    failure_reason: str | None = None


class PaymentCaptureError(Exception):
    """The gateway declined or could not complete a capture."""

    def __init__(self, order_id: str, reason: str | None) -> None:
        super().__init__(f"Payment capture failed for order {order_id}: {reason or 'unknown reason'}")
        self.order_id = order_id
        self.reason = reason


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    async def capture(self, order_id: str, amount: int) -> CaptureResult:
        """Capture ``amount`` (smallest currency unit) for ``order_id``."""
        ...
