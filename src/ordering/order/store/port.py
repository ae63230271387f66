"""Order store port (abstract interface).

Defines the contract every durable order store must honour. The store is
the only synchronization point between concurrent checkouts: its
conditional create decides which request owns a cart identifier.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ordering.order.order import Order


class StoreInconsistencyError(Exception):
    """A conditional create lost to a record that cannot be read back."""

    def __init__(self, cart_id: str) -> None:
        super().__init__(f"Idempotency check failed: order for cartId {cart_id} not found after conflict")
        self.cart_id = cart_id


@dataclass(frozen=True)
class CreateResult:
    """Outcome of a conditional create.

    ``created`` is True only for the single caller whose write landed;
    every other caller gets the record already on file.
    """

    created: bool
    order: Order


class OrderStore(ABC):
    """Abstract order store interface."""

    @abstractmethod
    async def fetch_by_cart_id(self, cart_id: str) -> Order | None:
        """Return the order recorded for ``cart_id``, if any."""
        ...

    @abstractmethod
    async def create_if_absent(self, order: Order) -> CreateResult:
        """Insert ``order`` unless its cart already has one.

        Raises:
            StoreInconsistencyError: if the insert was refused but no
                existing record could be read back.
        """
        ...
