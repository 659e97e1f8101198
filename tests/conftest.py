import json
import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Sets PROTEAN_ENV so the domain picks up the matching config overlay.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    """Run each test inside the domain context and clean up after it."""
    from storefront.config import get_settings
    from storefront.payments.currency import reset_exchange_rates
    from storefront.payments.gateway import reset_gateway

    with storefront_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()

        current_domain.event_store.store._data_reset()

    reset_gateway()
    reset_exchange_rates()
    get_settings.cache_clear()


# ---------------------------------------------------------------------------
# Adapters
# ---------------------------------------------------------------------------
@pytest.fixture()
def gateway():
    """A fresh FakeGateway installed as the active gateway."""
    from storefront.payments.gateway import set_gateway
    from storefront.payments.gateway.fake_adapter import FakeGateway

    fake = FakeGateway()
    set_gateway(fake)
    return fake


@pytest.fixture()
def exchange_rates():
    """FakeExchangeRates installed as the active provider, INR→USD at 0.012."""
    from storefront.payments.currency import set_exchange_rates
    from storefront.payments.currency.fake_adapter import FakeExchangeRates

    fake = FakeExchangeRates()
    set_exchange_rates(fake)
    return fake


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_product():
    from protean import current_domain

    from storefront.catalogue.management import AddProduct

    def _make(title="Cotton T-Shirt", price=100.0, sale_price=0.0, total_stock=10, **extra):
        return current_domain.process(
            AddProduct(
                title=title,
                price=price,
                sale_price=sale_price,
                total_stock=total_stock,
                image=extra.pop("image", f"https://img.example.com/{title.lower().replace(' ', '-')}.png"),
                **extra,
            ),
            asynchronous=False,
        )

    return _make


@pytest.fixture()
def address_snapshot():
    return {
        "address_id": "addr-001",
        "address": "12 MG Road",
        "city": "Bengaluru",
        "pincode": "560001",
        "phone": "9876543210",
        "notes": "Ring the bell",
    }


@pytest.fixture()
def add_to_cart():
    """Add a product to a user's cart, returning the cart id."""
    from protean import current_domain

    from storefront.cart.items import AddToCart

    def _add(user_id, product_id, quantity=1):
        return current_domain.process(
            AddToCart(user_id=user_id, product_id=product_id, quantity=quantity),
            asynchronous=False,
        )

    return _add


@pytest.fixture()
def checkout(address_snapshot, gateway, exchange_rates):
    """Initiate checkout for a user's stored cart, snapshotting lines the way the client does."""
    from protean import current_domain

    from storefront.cart.view import get_cart
    from storefront.checkout.initiation import InitiateCheckout

    def _checkout(user_id, address=address_snapshot):
        cart = get_cart(user_id)
        return current_domain.process(
            InitiateCheckout(
                user_id=user_id,
                cart_id=cart["cart_id"],
                items=json.dumps(cart["items"]),
                address=json.dumps(address) if address else None,
                payment_method="paypal",
            ),
            asynchronous=False,
        )

    return _checkout
