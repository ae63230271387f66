"""Checkout load test scenarios.

CheckoutRetryJourney checks out a new cart and then replays the exact
same request, asserting that every retry returns the first order.
DuplicateBurstUser fires the same cart from many users at once to
exercise the conditional create under contention.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import checkout_data, invalid_checkout_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import CheckoutState

RETRIES = 3

# Carts shared by every DuplicateBurstUser in this process
SHARED_CARTS = [checkout_data() for _ in range(20)]


class CheckoutRetryJourney(SequentialTaskSet):
    """Checkout -> Retry x3 -> Invalid request.

    Models a client whose network drops the first response and who
    retries with the same cart id.
    """

    def on_start(self):
        self.state = CheckoutState(body=checkout_data())

    @task
    def first_checkout(self):
        with self.client.post(
            "/checkout",
            json=self.state.body,
            catch_response=True,
            name="POST /checkout",
        ) as resp:
            if resp.status_code == 200:
                order = resp.json()
                self.state.order_id = order["orderId"]
                self.state.total = order["total"]
            else:
                resp.failure(f"Checkout failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def retry_checkout(self):
        for _ in range(RETRIES):
            with self.client.post(
                "/checkout",
                json=self.state.body,
                catch_response=True,
                name="POST /checkout (retry)",
            ) as resp:
                if resp.status_code != 200:
                    resp.failure(f"Retry failed: {resp.status_code} {extract_error_detail(resp)}")
                    continue
                order = resp.json()
                if order["orderId"] != self.state.order_id or order["total"] != self.state.total:
                    resp.failure(f"Retry returned order {order['orderId']}, expected {self.state.order_id}")
                self.state.retries += 1

    @task
    def invalid_checkout(self):
        with self.client.post(
            "/checkout",
            json=invalid_checkout_data(),
            catch_response=True,
            name="POST /checkout (invalid)",
        ) as resp:
            if resp.status_code == 400 and resp.json().get("error") == "VALIDATION_ERROR":
                resp.success()
            else:
                resp.failure(f"Expected 400, got {resp.status_code} {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class CheckoutUser(HttpUser):
    """A customer checking out and retrying."""

    tasks = [CheckoutRetryJourney]
    wait_time = between(0.5, 2.0)


class DuplicateBurstUser(HttpUser):
    """Many users submitting the same handful of carts concurrently."""

    wait_time = between(0.0, 0.1)

    def on_start(self):
        self.seen: dict[str, str] = {}

    @task
    def checkout_shared_cart(self):
        body = random.choice(SHARED_CARTS)
        with self.client.post(
            "/checkout",
            json=body,
            catch_response=True,
            name="POST /checkout (shared cart)",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Checkout failed: {resp.status_code} {extract_error_detail(resp)}")
                return
            order_id = resp.json()["orderId"]
            expected = self.seen.setdefault(body["cartId"], order_id)
            if order_id != expected:
                resp.failure(f"Cart {body['cartId']} produced orders {expected} and {order_id}")
