"""Shared BDD fixtures and step definitions for the storefront."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then

from storefront.cart.items import AddToCart
from storefront.catalogue.management import AddProduct
from storefront.catalogue.product import Product


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def products():
    """Product ids by title."""
    return {}


@pytest.fixture()
def error():
    """Container for captured errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{title}" priced {price:f} with {stock:d} in stock'))
def _(products, title, price, stock):
    products[title] = current_domain.process(
        AddProduct(title=title, price=price, total_stock=stock),
        asynchronous=False,
    )


@given(parsers.cfparse('the shopper "{user_id}" has {quantity:d} of "{title}" in the cart'))
def _(products, user_id, quantity, title):
    current_domain.process(
        AddToCart(user_id=user_id, product_id=products[title], quantity=quantity),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('"{title}" has {stock:d} in stock'))
def _(products, title, stock):
    assert current_domain.repository_for(Product).get(products[title]).total_stock == stock

