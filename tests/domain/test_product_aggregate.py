"""Tests for the Product aggregate: creation, stock decrement and review averages."""

import pytest
from protean.exceptions import ValidationError

from storefront.catalogue.events import AverageReviewRecalculated, ProductAdded, StockDecremented
from storefront.catalogue.product import Product
from storefront.exceptions import InsufficientStockError


def _product(**overrides):
    defaults = {"title": "Cotton T-Shirt", "price": 100.0, "total_stock": 5}
    defaults.update(overrides)
    return Product.add(**defaults)


class TestProductCreation:
    def test_add_sets_fields(self):
        product = _product(sale_price=80.0, brand="Acme")
        assert product.title == "Cotton T-Shirt"
        assert product.price == 100.0
        assert product.sale_price == 80.0
        assert product.total_stock == 5
        assert product.brand == "Acme"
        assert product.average_review == 0.0

    def test_add_raises_product_added(self):
        product = _product()
        assert len(product._events) == 1
        event = product._events[0]
        assert isinstance(event, ProductAdded)
        assert event.product_id == str(product.id)
        assert event.total_stock == 5

    def test_missing_sale_price_means_no_sale(self):
        product = _product(sale_price=None)
        assert product.sale_price == 0.0

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            _product(price=-1.0)

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError):
            _product(total_stock=-1)


class TestStockDecrement:
    def test_decrement_reduces_stock(self):
        product = _product(total_stock=5)
        product.decrement_stock(2)
        assert product.total_stock == 3

    def test_decrement_to_zero_is_allowed(self):
        product = _product(total_stock=2)
        product.decrement_stock(2)
        assert product.total_stock == 0

    def test_decrement_raises_event(self):
        product = _product(total_stock=5)
        product._events.clear()
        product.decrement_stock(2)
        event = product._events[-1]
        assert isinstance(event, StockDecremented)
        assert event.previous_stock == 5
        assert event.new_stock == 3
        assert event.quantity == 2

    def test_decrement_beyond_stock_is_refused(self):
        product = _product(total_stock=1)
        with pytest.raises(InsufficientStockError) as exc:
            product.decrement_stock(2)
        assert "total_stock" in exc.value.messages
        assert product.total_stock == 1

    def test_has_stock_for(self):
        product = _product(total_stock=3)
        assert product.has_stock_for(3)
        assert not product.has_stock_for(4)


class TestAverageReview:
    def test_mean_of_ratings(self):
        product = _product()
        product.record_average_review([5, 4, 3])
        assert product.average_review == 4.0

    def test_no_ratings_resets_to_zero(self):
        product = _product()
        product.record_average_review([])
        assert product.average_review == 0.0

    def test_recalculation_raises_event(self):
        product = _product()
        product.record_average_review([5, 2])
        event = product._events[-1]
        assert isinstance(event, AverageReviewRecalculated)
        assert event.average_review == 3.5
        assert event.review_count == 2
