"""Review aggregate: one user's rating and text for one product.

At most one review exists per (user, product). Resubmitting overwrites the
existing review in place rather than creating a second one.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.errors import InvalidInput
from storefront.reviews.events import ReviewSubmitted, ReviewUpdated

MIN_RATING = 1
MAX_RATING = 5


def validate_rating(rating):
    if rating is None or isinstance(rating, bool) or not MIN_RATING <= rating <= MAX_RATING:
        raise InvalidInput(f"Rating must be between {MIN_RATING} and {MAX_RATING}")


@storefront.aggregate
class Review:
    product_id = Identifier(required=True)
    user_id = Identifier(required=True)
    user_name = String(max_length=100)
    rating = Integer(required=True)
    text = Text(required=True)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def submit(cls, product_id, user_id, rating, text, user_name=None):
        validate_rating(rating)

        now = datetime.now(UTC)
        review = cls(
            product_id=str(product_id),
            user_id=str(user_id),
            user_name=user_name,
            rating=rating,
            text=text,
            created_at=now,
            updated_at=now,
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

    def revise(self, rating, text):
        validate_rating(rating)

        previous_rating = self.rating
        now = datetime.now(UTC)
        self.rating = rating
        self.text = text
        self.updated_at = now

        self.raise_(
            ReviewUpdated(
                review_id=str(self.id),
                product_id=str(self.product_id),
                user_id=str(self.user_id),
                previous_rating=previous_rating,
                rating=rating,
                updated_at=now,
            )
        )

    def to_summary(self):
        return {
            "id": str(self.id),
            "product_id": str(self.product_id),
            "user_id": str(self.user_id),
            "user_name": self.user_name,
            "rating": self.rating,
            "text": self.text,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
