import pytest
from ordering.order.store import InMemoryOrderStore
from payments.gateway import FakeGateway
from protean.integrations.pytest import DomainFixture

CART_ID = "123e4567-e89b-12d3-a456-426614174000"
CUSTOMER_ID = "customer-1"


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield


# ---------------------------------------------------------------------------
# Request fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def cart_id():
    return CART_ID


@pytest.fixture()
def valid_items():
    # subtotal = 2000x2 + 1500x1 = 5500 | tax = floor(5500 x 0.08) = 440 | total = 5940
    return [
        {"productId": "prod-1", "name": "T-Shirt", "unitPrice": 2000, "quantity": 2},
        {"productId": "prod-2", "name": "Mug", "unitPrice": 1500, "quantity": 1},
    ]


@pytest.fixture()
def make_body(cart_id, valid_items):
    """Build a checkout body, overriding or dropping top-level fields."""

    def _make(drop=(), **overrides):
        body = {"cartId": cart_id, "customerId": CUSTOMER_ID, "items": valid_items}
        body.update(overrides)
        for key in drop:
            body.pop(key, None)
        return body

    return _make


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------
@pytest.fixture()
def store():
    return InMemoryOrderStore()


@pytest.fixture()
def gateway():
    return FakeGateway()
