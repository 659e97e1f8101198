"""Expiry of checkouts that were authorized but never approved.

Meant to be triggered periodically by an external scheduler through the
admin API. Orders still pending/pending after the idle threshold are moved
to rejected/failed and can no longer be captured.
"""

from datetime import UTC, datetime, timedelta

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import DateTime, Integer
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


def _as_utc(moment):
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


@storefront.command(part_of="Order")
class ExpirePendingOrders:
    idle_threshold_hours = Integer(default=24, min_value=0)
    as_of = DateTime()  # Optional: defaults to now


@storefront.command_handler(part_of=Order)
class ExpirePendingOrdersHandler:
    @handle(ExpirePendingOrders)
    def expire_pending_orders(self, command):
        as_of = _as_utc(command.as_of or datetime.now(UTC))
        threshold_hours = 24 if command.idle_threshold_hours is None else command.idle_threshold_hours
        cutoff = as_of - timedelta(hours=threshold_hours)

        logger.info(
            "Checking for stale pending orders",
            cutoff=cutoff.isoformat(),
            threshold_hours=threshold_hours,
        )

        repo = current_domain.repository_for(Order)
        stale = [o for o in repo.awaiting_payment() if o.order_date and _as_utc(o.order_date) <= cutoff]
        if not stale:
            logger.info("No stale pending orders found")
            return 0

        expired_count = 0
        for order in stale:
            try:
                order.expire()
                repo.add(order)
                expired_count += 1
                logger.info(
                    "Expired pending order",
                    order_id=str(order.id),
                    user_id=str(order.user_id),
                    order_date=str(order.order_date),
                )
            except ValidationError as exc:
                logger.warning("Failed to expire order", order_id=str(order.id), error=str(exc))

        logger.info("Pending order expiry complete", expired_count=expired_count)
        return expired_count
