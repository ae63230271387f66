"""SQLAlchemy order store: durable storage with a conditional insert.

One row per cart identifier, with ``cart_id`` as the primary key. The
database's uniqueness check is the conditional write: an ``INSERT`` that
raises ``IntegrityError`` means another request already owns the cart,
and the row on file is read back and returned instead.

SQLAlchemy calls block, so they run in a worker thread via
``asyncio.to_thread``.
"""

import asyncio

from sqlalchemy import JSON, BigInteger, Column, MetaData, String, Table, Text, create_engine, insert, select
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import IntegrityError

from ordering.domain import logger
from ordering.order.order import Order
from ordering.order.store.port import CreateResult, OrderStore, StoreInconsistencyError


def orders_table(name: str, metadata: MetaData) -> Table:
    return Table(
        name,
        metadata,
        Column("cart_id", String(64), primary_key=True),
        Column("order_id", String(64), nullable=False, unique=True),
        Column("customer_id", Text, nullable=False),
        Column("items", JSON, nullable=False),
        Column("subtotal", BigInteger, nullable=False),
        Column("tax", BigInteger, nullable=False),
        Column("total", BigInteger, nullable=False),
        Column("status", String(20), nullable=False),
        Column("created_at", String(40), nullable=False),
    )


def build_engine(url: str) -> Engine:
    """Create an engine for ``url`` that can be shared across worker threads."""
    kwargs = {}
    if make_url(url).get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
    return create_engine(url, **kwargs)


class SqlOrderStore(OrderStore):
    """Order store backed by a relational table."""

    def __init__(self, engine: Engine | str, table_name: str = "orders") -> None:
        self.engine = build_engine(engine) if isinstance(engine, str) else engine
        self.metadata = MetaData()
        self.table = orders_table(table_name, self.metadata)

    # -------------------------------------------------------------------
    # Schema management
    # -------------------------------------------------------------------
    def create_schema(self) -> None:
        self.metadata.create_all(self.engine)

    def drop_schema(self) -> None:
        self.metadata.drop_all(self.engine)

    # -------------------------------------------------------------------
    # Row mapping
    # -------------------------------------------------------------------
    @staticmethod
    def _to_row(record: dict) -> dict:
        return {
            "cart_id": record["cartId"],
            "order_id": record["orderId"],
            "customer_id": record["customerId"],
            "items": record["items"],
            "subtotal": record["subtotal"],
            "tax": record["tax"],
            "total": record["total"],
            "status": record["status"],
            "created_at": record["createdAt"],
        }

    @staticmethod
    def _to_record(row) -> dict:
        return {
            "orderId": row["order_id"],
            "cartId": row["cart_id"],
            "customerId": row["customer_id"],
            "items": row["items"],
            "subtotal": row["subtotal"],
            "tax": row["tax"],
            "total": row["total"],
            "status": row["status"],
            "createdAt": row["created_at"],
        }

    # -------------------------------------------------------------------
    # Blocking operations
    # -------------------------------------------------------------------
    def _select(self, cart_id: str) -> dict | None:
        with self.engine.connect() as conn:
            row = conn.execute(select(self.table).where(self.table.c.cart_id == cart_id)).mappings().first()
        return self._to_record(row) if row is not None else None

    def _insert(self, record: dict) -> bool:
        try:
            with self.engine.begin() as conn:
                conn.execute(insert(self.table).values(**self._to_row(record)))
        except IntegrityError:
            logger.info("order_store.conflict", cart_id=record["cartId"])
            return False
        return True

    # -------------------------------------------------------------------
    # OrderStore
    # -------------------------------------------------------------------
    async def fetch_by_cart_id(self, cart_id: str) -> Order | None:
        record = await asyncio.to_thread(self._select, cart_id)
        return Order.from_record(record) if record is not None else None

    async def create_if_absent(self, order: Order) -> CreateResult:
        if await asyncio.to_thread(self._insert, order.to_record()):
            return CreateResult(created=True, order=order)

        cart_id = str(order.cart_id)
        existing = await self.fetch_by_cart_id(cart_id)
        if existing is None:
            raise StoreInconsistencyError(cart_id)
        return CreateResult(created=False, order=existing)
