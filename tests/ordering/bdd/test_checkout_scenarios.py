"""BDD tests for the checkout scenarios."""

import asyncio

import pytest
from ordering.checkout.service import CheckoutOutcome, CheckoutService
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/checkout.feature")


@pytest.fixture()
def cart_items():
    return []


@pytest.fixture()
def results():
    return []


@pytest.fixture()
def service(store, gateway):
    return CheckoutService(store, gateway)


def _body(cart_id, items):
    return {"cartId": cart_id, "customerId": "customer-1", "items": items}


def _item(quantity, product_id, unit_price):
    return {"productId": product_id, "name": f"Product {product_id}", "unitPrice": unit_price, "quantity": quantity}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a cart containing {quantity:d} x "{product_id}" at {unit_price:d} cents'))
def _(cart_items, quantity, product_id, unit_price):
    cart_items.append(_item(quantity, product_id, unit_price))


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when("the cart is checked out")
def _(service, cart_id, cart_items, results):
    results.append(asyncio.run(service.checkout(_body(cart_id, cart_items))))


@when("the cart is checked out twice concurrently")
def _(service, cart_id, cart_items, results):
    async def both():
        body = _body(cart_id, cart_items)
        return await asyncio.gather(service.checkout(body), service.checkout(body))

    results.extend(asyncio.run(both()))


@when(parsers.cfparse('the cart is checked out again with {quantity:d} x "{product_id}" at {unit_price:d} cents'))
def _(service, cart_id, results, quantity, product_id, unit_price):
    body = _body(cart_id, [_item(quantity, product_id, unit_price)])
    results.append(asyncio.run(service.checkout(body)))


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the checkout completes")
def _(results):
    assert results[-1].outcome is CheckoutOutcome.COMPLETED


@then(parsers.cfparse("the order subtotal is {amount:d}"))
def _(results, amount):
    assert results[-1].order.subtotal == amount


@then(parsers.cfparse("the order tax is {amount:d}"))
def _(results, amount):
    assert results[-1].order.tax == amount


@then(parsers.cfparse("the order total is {amount:d}"))
def _(results, amount):
    assert results[-1].order.total == amount


@then(parsers.cfparse('the checkout is rejected with "{message}"'))
def _(results, message):
    assert results[-1].outcome is CheckoutOutcome.VALIDATION_FAILED
    assert results[-1].message == message


@then("no store or payment calls were made")
def _(store, gateway):
    assert store.calls == []
    assert gateway.calls == []


@then("every checkout returns the same order id")
def _(results):
    assert all(result.outcome is CheckoutOutcome.COMPLETED for result in results)
    assert len({str(result.order.order_id) for result in results}) == 1


@then("the store created the order once and refused it once")
def _(store):
    creates = [call["created"] for call in store.calls if call["method"] == "create_if_absent"]
    assert sorted(creates) == [False, True]


@then(parsers.cfparse("the payment capture count is {count:d}"))
def _(gateway, count):
    assert len(gateway.calls) == count
