"""Exchange-rate provider factory.

Provides get_exchange_rates() / set_exchange_rates() to swap implementations:
- FakeExchangeRates for development and testing (EXCHANGE_RATES_PROVIDER=fake)
- ExchangeRateApiRates for live lookups (EXCHANGE_RATES_PROVIDER=exchangerate-api)
"""

from storefront.config import get_settings
from storefront.payments.currency.exchangerate_api import ExchangeRateApiRates
from storefront.payments.currency.fake_adapter import FakeExchangeRates
from storefront.payments.currency.port import ExchangeRates

_current_rates: ExchangeRates | None = None


def _build_exchange_rates() -> ExchangeRates:
    settings = get_settings()
    if settings.exchange_rates_provider == "exchangerate-api":
        return ExchangeRateApiRates(url=settings.exchange_rates_url, timeout=settings.http_timeout_seconds)
    return FakeExchangeRates()


def get_exchange_rates() -> ExchangeRates:
    global _current_rates
    if _current_rates is None:
        _current_rates = _build_exchange_rates()
    return _current_rates


def set_exchange_rates(rates: ExchangeRates) -> None:
    """Override the active provider (useful for tests)."""
    global _current_rates
    _current_rates = rates


def reset_exchange_rates() -> None:
    global _current_rates
    _current_rates = None
