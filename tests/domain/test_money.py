from decimal import Decimal

from storefront.shared.money import convert, effective_price, line_total, round_money


class TestEffectivePrice:
    def test_sale_price_wins_when_set(self):
        assert effective_price(100.0, 80.0) == 80.0

    def test_zero_sale_price_means_list_price(self):
        assert effective_price(100.0, 0.0) == 100.0

    def test_missing_sale_price_means_list_price(self):
        assert effective_price(100.0, None) == 100.0


class TestRounding:
    def test_rounds_half_up(self):
        assert round_money(Decimal("0.125")) == Decimal("0.13")
        assert round_money(Decimal("0.124")) == Decimal("0.12")

    def test_convert_uses_decimal_string_of_float(self):
        # 0.1 as a float is not exactly 0.1; conversion must not leak that
        assert convert(0.1, Decimal("3")) == Decimal("0.30")

    def test_convert_inr_to_usd(self):
        assert convert(100.0, Decimal("0.012")) == Decimal("1.20")

    def test_line_total(self):
        assert line_total(Decimal("0.40"), 3) == Decimal("1.20")
