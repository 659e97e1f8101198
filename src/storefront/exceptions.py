"""Storefront errors that have no Protean counterpart.

Missing aggregates surface as ``protean.exceptions.ObjectNotFoundError`` and
rule violations as ``protean.exceptions.ValidationError``. The errors below
carry the same ``{field: [message]}`` shape in ``messages``.
"""


class StorefrontError(Exception):
    def __init__(self, messages: dict[str, list[str]]) -> None:
        super().__init__(messages)
        self.messages = messages


class GatewayError(StorefrontError):
    """The payment gateway refused, errored, or could not be reached."""


class ExchangeRateUnavailable(GatewayError):
    """No exchange rate could be obtained for a checkout."""


class InsufficientStockError(StorefrontError):
    """A stock decrement would take a product below zero."""
