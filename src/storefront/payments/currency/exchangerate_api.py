"""Live exchange rates from an exchangerate-api style endpoint.

``GET {url}/{base}`` answers with ``{"base": ..., "rates": {quote: rate}}``.
Every call goes to the network; a checkout looks up its rate exactly once.
"""

from decimal import Decimal, InvalidOperation

import requests
import structlog

from storefront.exceptions import ExchangeRateUnavailable
from storefront.payments.currency.port import ExchangeRates

logger = structlog.get_logger(__name__)


class ExchangeRateApiRates(ExchangeRates):
    def __init__(self, url: str, timeout: float = 10.0, session: requests.Session | None = None) -> None:
        self.url = url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def rate(self, base: str, quote: str) -> Decimal:
        base, quote = base.upper(), quote.upper()
        if base == quote:
            return Decimal("1")

        try:
            response = self.session.get(f"{self.url}/{base}", timeout=self.timeout)
            response.raise_for_status()
            value = response.json()["rates"][quote]
            return Decimal(str(value))
        except (requests.RequestException, ValueError, KeyError, TypeError, InvalidOperation) as exc:
            logger.warning("Exchange rate lookup failed", base=base, quote=quote, error=str(exc))
            raise ExchangeRateUnavailable({"currency": [f"Could not fetch exchange rate {base} to {quote}"]}) from exc
