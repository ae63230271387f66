"""Ordering bounded context: idempotent checkout.

Prices a cart, records exactly one Order per cart identifier and captures
payment only after that Order is durable.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
