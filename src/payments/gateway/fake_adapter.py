"""Configurable fake payment gateway for development and testing.

This adapter simulates a real payment gateway without any external calls.
It can be configured at runtime to succeed or fail, and keeps every call
so tests can assert how many captures happened and for which order.
"""

import asyncio
from uuid import uuid4

from payments.gateway.port import CaptureResult, PaymentGateway


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Card declined"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Card declined") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    async def capture(self, order_id: str, amount: int) -> CaptureResult:
        await asyncio.sleep(0)
        self.calls.append({"method": "capture", "order_id": order_id, "amount": amount})

        if self.should_succeed:
            return CaptureResult(
                success=True,
                transaction_id=f"fake_txn_{uuid4().hex[:12]}",
            )
        return CaptureResult(
            success=False,
            failure_reason=self.failure_reason,
        )
