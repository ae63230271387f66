"""Checkout orchestrator: idempotent order creation followed by payment capture.

Flow for a single request:
    1. Validate the body (no side effects on failure)
    2. Probe the store for an order already recorded under the cartId
    3. Price the cart server-side
    4. Build a candidate Order with a fresh orderId and timestamp
    5. Conditionally persist it; losing the race returns the winner's order
    6. Capture payment, only when this request created the order
    7. Return the persisted order, whether new or pre-existing

Persist-then-capture is a hard ordering: a charge is never attempted for an
order that is not durable, and a crash between the two leaves an order
that a retry finds instead of re-creating. A failed capture does not roll
the order back.

Requests share nothing in process. The store's conditional create is the
only coordination between concurrent checkouts of the same cart.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from payments.gateway.port import PaymentCaptureError, PaymentGateway

from ordering.checkout.pricing import calculate_pricing
from ordering.checkout.validation import CheckoutValidationError, validate_checkout_request
from ordering.domain import logger
from ordering.order.order import Order
from ordering.order.store.port import OrderStore

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred"


class CheckoutOutcome(Enum):
    COMPLETED = "Completed"
    VALIDATION_FAILED = "ValidationFailed"
    INTERNAL_FAILURE = "InternalFailure"


_STATUS_CODES = {
    CheckoutOutcome.COMPLETED: 200,
    CheckoutOutcome.VALIDATION_FAILED: 400,
    CheckoutOutcome.INTERNAL_FAILURE: 500,
}


@dataclass(frozen=True)
class CheckoutResult:
    """Terminal state of one checkout request."""

    outcome: CheckoutOutcome
    order: Order | None = None
    message: str | None = None

    @classmethod
    def completed(cls, order: Order) -> "CheckoutResult":
        return cls(outcome=CheckoutOutcome.COMPLETED, order=order)

    @classmethod
    def validation_failed(cls, message: str) -> "CheckoutResult":
        return cls(outcome=CheckoutOutcome.VALIDATION_FAILED, message=message)

    @classmethod
    def internal_failure(cls) -> "CheckoutResult":
        return cls(outcome=CheckoutOutcome.INTERNAL_FAILURE, message=INTERNAL_ERROR_MESSAGE)

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self.outcome]


def _new_order_id() -> str:
    return str(uuid4())


def _utc_now() -> datetime:
    return datetime.now(UTC)


class CheckoutService:
    """Runs the checkout flow against an order store and a payment gateway."""

    def __init__(
        self,
        store: OrderStore,
        gateway: PaymentGateway,
        *,
        generate_id: Callable[[], str] = _new_order_id,
        now: Callable[[], datetime] = _utc_now,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.store = store
        self.gateway = gateway
        self._generate_id = generate_id
        self._now = now
        self._clock = clock

    def _elapsed_ms(self, started: float) -> int:
        return int((self._clock() - started) * 1000)

    async def checkout(self, body) -> CheckoutResult:
        """Process one checkout request body.

        Never raises for request or infrastructure problems: they come back
        as ``VALIDATION_FAILED`` or ``INTERNAL_FAILURE`` results, the latter
        with a generic message and the detail in the log only.
        """
        started = self._clock()

        try:
            request = validate_checkout_request(body)
        except CheckoutValidationError as exc:
            return CheckoutResult.validation_failed(exc.message)

        log = logger.bind(cart_id=request.cart_id)
        order_id = None

        try:
            log.info("checkout.start")

            existing = await self.store.fetch_by_cart_id(request.cart_id)
            if existing is not None:
                log.info(
                    "checkout.duplicate",
                    order_id=str(existing.order_id),
                    duration_ms=self._elapsed_ms(started),
                )
                return CheckoutResult.completed(existing)

            # Totals are always derived here, never taken from the caller
            pricing = calculate_pricing(request.items)
            candidate = Order.place(
                order_id=self._generate_id(),
                cart_id=request.cart_id,
                customer_id=request.customer_id,
                pricing=pricing,
                created_at=self._now(),
            )
            order_id = str(candidate.order_id)

            result = await self.store.create_if_absent(candidate)
            if not result.created:
                # A concurrent request won the conditional create
                log.info(
                    "checkout.duplicate",
                    order_id=str(result.order.order_id),
                    duration_ms=self._elapsed_ms(started),
                )
                return CheckoutResult.completed(result.order)

            await self._capture_payment(result.order)

            log.info("checkout.complete", order_id=order_id, duration_ms=self._elapsed_ms(started))
            return CheckoutResult.completed(result.order)

        except Exception:
            log.exception("checkout.error", order_id=order_id, duration_ms=self._elapsed_ms(started))
            return CheckoutResult.internal_failure()

    async def _capture_payment(self, order: Order) -> None:
        order_id = str(order.order_id)
        logger.info("payment.capture", cart_id=str(order.cart_id), order_id=order_id, total=order.total)

        result = await self.gateway.capture(order_id, order.total)
        if not result.success:
            raise PaymentCaptureError(order_id, result.failure_reason)
