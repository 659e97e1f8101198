"""Review aggregate: one rating and message per user per product."""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.reviews.events import ReviewSubmitted


@storefront.aggregate
class Review:
    product_id = Identifier(required=True)
    user_id = Identifier(required=True)
    user_name = String(required=True, max_length=150)
    message = Text(required=True)
    rating = Integer(required=True)
    created_at = DateTime()

    @invariant.post
    def rating_must_be_in_range(self):
        if self.rating is not None and (self.rating < 1 or self.rating > 5):
            raise ValidationError({"rating": ["Rating must be between 1 and 5"]})

    @classmethod
    def submit(cls, product_id, user_id, user_name, message, rating):
        now = datetime.now(UTC)
        review = cls(
            product_id=product_id,
            user_id=user_id,
            user_name=user_name,
            message=message,
            rating=rating,
            created_at=now,
        )
        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                product_id=str(product_id),
                user_id=str(user_id),
                rating=rating,
                submitted_at=now,
            )
        )
        return review
