"""Integration tests for the checkout endpoint via TestClient."""

import json

import pytest
from app import create_app
from fastapi.testclient import TestClient
from ordering.checkout.service import CheckoutService
from ordering.order.store import InMemoryOrderStore


@pytest.fixture()
def client(store, gateway):
    app = create_app(service=CheckoutService(store, gateway))
    return TestClient(app)


def _post(client, body):
    return client.post("/checkout", json=body)


class TestCheckoutEndpoint:
    def test_valid_cart(self, client, make_body, cart_id):
        response = _post(client, make_body())

        assert response.status_code == 200
        body = response.json()
        assert body["cartId"] == cart_id
        assert body["customerId"] == "customer-1"
        assert body["subtotal"] == 5500
        assert body["tax"] == 440
        assert body["total"] == 5940
        assert body["status"] == "CONFIRMED"
        assert isinstance(body["orderId"], str)
        assert isinstance(body["createdAt"], str)

    def test_response_money_fields_are_integers(self, client, make_body):
        body = _post(client, make_body()).json()

        for key in ("subtotal", "tax", "total"):
            assert isinstance(body[key], int)
        for item in body["items"]:
            assert isinstance(item["unitPrice"], int)
            assert isinstance(item["quantity"], int)
            assert isinstance(item["lineTotal"], int)

    def test_repeat_returns_same_order(self, client, store, gateway, make_body):
        first = _post(client, make_body()).json()
        second = _post(client, make_body()).json()

        assert second == first
        assert len(store) == 1
        assert len(gateway.calls) == 1

    def test_text_fields_are_returned_verbatim(self, client, make_body):
        body = make_body(
            customerId="acme & co",
            items=[{"productId": "p&1", "name": "Tom & Jerry <Deluxe>", "unitPrice": 1000, "quantity": 1}],
        )

        first = _post(client, body).json()
        again = _post(client, body).json()

        for order in (first, again):
            assert order["customerId"] == "acme & co"
            assert order["items"][0]["productId"] == "p&1"
            assert order["items"][0]["name"] == "Tom & Jerry <Deluxe>"

    def test_oversized_unit_price(self, client, store, make_body):
        response = _post(
            client,
            make_body(items=[{"productId": "p1", "name": "Item", "unitPrice": 10**19, "quantity": 1}]),
        )

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"
        assert len(store) == 0

    def test_empty_cart(self, client, make_body):
        response = _post(client, make_body(items=[]))

        assert response.status_code == 400
        assert response.json() == {"error": "VALIDATION_ERROR", "message": "Cart is empty"}

    def test_missing_cart_id(self, client, make_body):
        response = _post(client, make_body(drop=["cartId"]))

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    def test_negative_unit_price(self, client, make_body):
        response = _post(
            client,
            make_body(items=[{"productId": "p1", "name": "Item", "unitPrice": -100, "quantity": 1}]),
        )

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    def test_malformed_json(self, client):
        response = client.post("/checkout", content=b"{'cartId': ", headers={"Content-Type": "application/json"})

        assert response.status_code == 400
        assert response.json() == {"error": "VALIDATION_ERROR", "message": "Invalid JSON body"}

    def test_empty_body(self, client):
        response = client.post("/checkout")

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid JSON body"

    def test_body_is_not_an_object(self, client):
        response = client.post("/checkout", content=json.dumps([1, 2]))

        assert response.status_code == 400
        assert response.json()["message"] == "Request body must be a JSON object"


class TestInternalErrors:
    def test_failure_does_not_leak_detail(self, gateway, make_body):
        class BrokenStore(InMemoryOrderStore):
            async def fetch_by_cart_id(self, cart_id):
                raise RuntimeError("password authentication failed for user 'orders'")

        client = TestClient(create_app(service=CheckoutService(BrokenStore(), gateway)))

        response = _post(client, make_body())

        assert response.status_code == 500
        assert response.json() == {"error": "INTERNAL_ERROR", "message": "An unexpected error occurred"}
        assert "password" not in response.text

    def test_declined_payment(self, client, gateway, store, make_body):
        gateway.configure(should_succeed=False)

        response = _post(client, make_body())

        assert response.status_code == 500
        assert response.json()["error"] == "INTERNAL_ERROR"
        assert len(store) == 1


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "domain": "ordering"}
