"""Exchange-rate port: how many units of ``quote`` one unit of ``base`` buys."""

from abc import ABC, abstractmethod
from decimal import Decimal


class ExchangeRates(ABC):
    @abstractmethod
    def rate(self, base: str, quote: str) -> Decimal:
        """Raise ExchangeRateUnavailable when no rate can be obtained."""
        ...
