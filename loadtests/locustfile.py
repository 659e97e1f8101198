"""Storefront Load Testing: Locust entry point.

Usage:
    # Web UI:
    locust -f loadtests/locustfile.py --host http://localhost:8000

    # Headless (CI mode):
    locust -f loadtests/locustfile.py ShopperUser --headless \
           -u 20 -r 2 -t 120s --host http://localhost:8000 --csv=results/loadtest
"""

import logging
import time

import requests
from locust import events

from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.checkout import ShopperUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request.

    Extracts the API error body so you see "Insufficient stock for ..."
    instead of just "409".
    """
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    """Log a marker when load test begins and make sure the gateway will approve."""
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    if environment.host:
        try:
            resp = requests.post(
                f"{environment.host}/payments/gateway/configure",
                json={"should_succeed": True},
                timeout=5,
            )
            print(f"[LOADTEST] Gateway configure: {resp.status_code}")
        except requests.RequestException as e:
            print(f"[LOADTEST] Could not configure gateway: {e}")
    print()


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    """Print how many orders were placed while the test ran."""
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
    if not environment.host:
        return
    try:
        resp = requests.get(f"{environment.host}/admin/orders", timeout=10)
        orders = resp.json()
        paid = sum(1 for order in orders if order.get("payment_status") == "paid")
        print(f"[LOADTEST] Orders: {len(orders)} placed, {paid} paid\n")
    except (requests.RequestException, ValueError) as e:
        print(f"[LOADTEST] Could not fetch order summary: {e}\n")
