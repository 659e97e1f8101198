"""Fixed exchange rates for development and testing."""

from decimal import Decimal

from storefront.exceptions import ExchangeRateUnavailable
from storefront.payments.currency.port import ExchangeRates

_DEFAULT_RATES = {
    ("INR", "USD"): Decimal("0.012"),
}


class FakeExchangeRates(ExchangeRates):
    def __init__(self) -> None:
        self.rates: dict[tuple[str, str], Decimal] = dict(_DEFAULT_RATES)
        self.available: bool = True
        self.lookups: list[tuple[str, str]] = []

    def configure(self, rates: dict[tuple[str, str], Decimal] | None = None, available: bool = True) -> None:
        if rates is not None:
            self.rates = {pair: Decimal(str(value)) for pair, value in rates.items()}
        self.available = available

    def rate(self, base: str, quote: str) -> Decimal:
        base, quote = base.upper(), quote.upper()
        if base == quote:
            return Decimal("1")

        self.lookups.append((base, quote))
        if not self.available or (base, quote) not in self.rates:
            raise ExchangeRateUnavailable({"currency": [f"No exchange rate for {base} to {quote}"]})
        return self.rates[(base, quote)]
