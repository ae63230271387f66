"""Order store adapters.

- InMemoryOrderStore for development and testing
- SqlOrderStore for durable storage through SQLAlchemy
"""

from ordering.order.store.memory_adapter import InMemoryOrderStore
from ordering.order.store.port import CreateResult, OrderStore, StoreInconsistencyError
from ordering.order.store.sql_adapter import SqlOrderStore

__all__ = [
    "CreateResult",
    "InMemoryOrderStore",
    "OrderStore",
    "SqlOrderStore",
    "StoreInconsistencyError",
]
