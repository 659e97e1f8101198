"""Storefront domain: catalogue, shopping carts, orders, addresses and reviews.

Everything the checkout touches lives in this one domain so that a payment
capture (order, product stock, cart disposal) commits in a single unit of work.
"""

import structlog
from protean.domain import Domain

storefront = Domain(name="storefront")

logger = structlog.get_logger(__name__)
