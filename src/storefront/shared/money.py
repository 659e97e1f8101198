"""Money arithmetic shared by the cart view, checkout and the gateway adapters.

Amounts are stored as floats on aggregates; arithmetic that feeds a payment
goes through Decimal and is rounded half-up to cents.
"""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def effective_price(price, sale_price) -> float:
    """Unit price actually charged: the sale price when one is set, else the list price."""
    if sale_price and sale_price > 0:
        return float(sale_price)
    return float(price or 0.0)


def to_decimal(amount) -> Decimal:
    return Decimal(str(amount))


def round_money(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def convert(amount, rate: Decimal) -> Decimal:
    """Convert ``amount`` at ``rate`` and round to cents."""
    return round_money(to_decimal(amount) * rate)


def line_total(unit_price, quantity: int) -> Decimal:
    return round_money(to_decimal(unit_price) * quantity)
