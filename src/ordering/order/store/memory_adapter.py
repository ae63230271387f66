"""In-process order store for development and testing.

Keeps serialized order records in a dict keyed by cart identifier. Every
operation yields to the event loop before touching the records, so
concurrent checkouts interleave at the same points they would against a
networked store. It records every call for assertions in tests.
"""

import asyncio
import threading

from ordering.order.order import Order
from ordering.order.store.port import CreateResult, OrderStore, StoreInconsistencyError


class InMemoryOrderStore(OrderStore):
    """Dict-backed order store with an atomic insert-if-absent."""

    def __init__(self) -> None:
        self._records: dict[str, dict] = {}
        self._lock = threading.Lock()
        self.calls: list[dict] = []

    def __len__(self) -> int:
        return len(self._records)

    async def fetch_by_cart_id(self, cart_id: str) -> Order | None:
        await asyncio.sleep(0)
        self.calls.append({"method": "fetch_by_cart_id", "cart_id": cart_id})

        record = self._records.get(cart_id)
        return Order.from_record(record) if record is not None else None

    async def create_if_absent(self, order: Order) -> CreateResult:
        await asyncio.sleep(0)
        cart_id = str(order.cart_id)

        with self._lock:
            created = cart_id not in self._records
            if created:
                self._records[cart_id] = order.to_record()

        self.calls.append({"method": "create_if_absent", "cart_id": cart_id, "created": created})
        if created:
            return CreateResult(created=True, order=order)

        existing = await self.fetch_by_cart_id(cart_id)
        if existing is None:
            raise StoreInconsistencyError(cart_id)
        return CreateResult(created=False, order=existing)
