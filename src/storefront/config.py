"""Runtime settings read from the environment."""

import os
from dataclasses import dataclass
from functools import lru_cache

_PAYPAL_HOSTS = {
    "sandbox": "https://api-m.sandbox.paypal.com",
    "live": "https://api-m.paypal.com",
}


@dataclass(frozen=True)
class Settings:
    environment: str
    store_currency: str
    settlement_currency: str
    payment_gateway: str
    paypal_mode: str
    paypal_client_id: str
    paypal_client_secret: str
    paypal_return_url: str
    paypal_cancel_url: str
    exchange_rates_provider: str
    exchange_rates_url: str
    http_timeout_seconds: float
    max_addresses_per_user: int

    @property
    def paypal_base_url(self) -> str:
        return _PAYPAL_HOSTS.get(self.paypal_mode, _PAYPAL_HOSTS["sandbox"])

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings(
        environment=os.getenv("PROTEAN_ENV", "development").lower(),
        store_currency=os.getenv("STORE_CURRENCY", "INR").upper(),
        settlement_currency=os.getenv("SETTLEMENT_CURRENCY", "USD").upper(),
        payment_gateway=os.getenv("PAYMENT_GATEWAY", "fake").lower(),
        paypal_mode=os.getenv("PAYPAL_MODE", "sandbox").lower(),
        paypal_client_id=os.getenv("PAYPAL_CLIENT_ID", ""),
        paypal_client_secret=os.getenv("PAYPAL_CLIENT_SECRET", ""),
        paypal_return_url=os.getenv("PAYPAL_RETURN_URL", "http://localhost:5173/shop/paypal-return"),
        paypal_cancel_url=os.getenv("PAYPAL_CANCEL_URL", "http://localhost:5173/shop/paypal-cancel"),
        exchange_rates_provider=os.getenv("EXCHANGE_RATES_PROVIDER", "fake").lower(),
        exchange_rates_url=os.getenv("EXCHANGE_RATES_URL", "https://api.exchangerate-api.com/v4/latest"),
        http_timeout_seconds=float(os.getenv("HTTP_TIMEOUT_SECONDS", "10")),
        max_addresses_per_user=int(os.getenv("MAX_ADDRESSES_PER_USER", "3")),
    )
