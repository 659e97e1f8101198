"""SubmitReview: add a product review and refresh the product's average rating.

Only users with a paid order containing the product may review it, and
only once. Both checks are cross-aggregate, so they live in the handler.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.order.order import Order
from storefront.reviews.review import Review

logger = structlog.get_logger(__name__)


def reviews_for(product_id) -> list[Review]:
    return current_domain.repository_for(Review)._dao.query.filter(product_id=str(product_id)).all().items


def has_purchased(user_id, product_id) -> bool:
    paid_orders = current_domain.repository_for(Order).paid_for_user(user_id)
    return any(str(item.product_id) == str(product_id) for order in paid_orders for item in order.items)


@storefront.command(part_of="Review")
class SubmitReview:
    product_id = Identifier(required=True)
    user_id = Identifier(required=True)
    user_name = String(required=True, max_length=150)
    message = Text(required=True)
    rating = Integer(required=True, min_value=1, max_value=5)


@storefront.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        product_repo = current_domain.repository_for(Product)
        product = product_repo.get(command.product_id)

        if not has_purchased(command.user_id, command.product_id):
            raise ValidationError({"review": ["You need to purchase this product to review it"]})

        existing = reviews_for(command.product_id)
        if any(str(r.user_id) == str(command.user_id) for r in existing):
            raise ValidationError({"review": ["You have already reviewed this product"]})

        review = Review.submit(
            product_id=command.product_id,
            user_id=command.user_id,
            user_name=command.user_name,
            message=command.message,
            rating=command.rating,
        )
        current_domain.repository_for(Review).add(review)

        product.record_average_review([r.rating for r in existing] + [review.rating])
        product_repo.add(product)

        logger.info(
            "Review submitted",
            product_id=str(product.id),
            user_id=str(command.user_id),
            average_review=product.average_review,
        )
        return str(review.id)


def list_reviews(product_id) -> list[dict]:
    return [
        {
            "review_id": str(r.id),
            "product_id": str(r.product_id),
            "user_id": str(r.user_id),
            "user_name": r.user_name,
            "message": r.message,
            "rating": r.rating,
            "created_at": r.created_at.isoformat() if r.created_at else None,
        }
        for r in sorted(reviews_for(product_id), key=lambda r: r.created_at.timestamp() if r.created_at else 0.0)
    ]
