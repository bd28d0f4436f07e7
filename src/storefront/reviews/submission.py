"""SubmitReview: create a review, or overwrite the user's existing one.

Enforces one review per user per product with a lookup before insert, and
recomputes the product rating in the same unit of work as the review write.

Purchase gating is a deployment policy: with ``REVIEWS_REQUIRE_PURCHASE``
enabled, only users holding a non-pending order line for the product may
review it.
"""

import os

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.catalogue.rating import recompute_rating
from storefront.domain import storefront
from storefront.errors import Conflict, NotFound, Unauthorized
from storefront.identity.principal import load_user
from storefront.identity.user import User
from storefront.reviews.review import Review, validate_rating
from storefront.utils.repository import fetch_all

logger = structlog.get_logger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


def purchase_required() -> bool:
    return os.getenv("REVIEWS_REQUIRE_PURCHASE", "false").strip().lower() in _TRUTHY


@storefront.command(part_of="Review")
class SubmitReview:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    rating = Integer(required=True)
    text = Text(required=True)


@storefront.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        validate_rating(command.rating)

        user = load_user(command.user_id)

        product_repo = current_domain.repository_for(Product)
        try:
            product = product_repo.get(command.product_id)
        except ObjectNotFoundError:
            raise NotFound("Product not found") from None

        if purchase_required() and not user.has_purchased(product.id):
            raise Unauthorized("Only customers who ordered this product can review it")

        review_repo = current_domain.repository_for(Review)
        existing = fetch_all(Review, user_id=str(user.id), product_id=str(product.id))
        if len(existing) > 1:
            raise Conflict("More than one review exists for this user and product")

        if existing:
            review = existing[0]
            review.revise(rating=command.rating, text=command.text)
            created = False
        else:
            review = Review.submit(
                product_id=product.id,
                user_id=user.id,
                user_name=user.name,
                rating=command.rating,
                text=command.text,
            )
            user.record_review(review.id)
            current_domain.repository_for(User).add(user)
            created = True

        review_repo.add(review)

        recompute_rating(product, replacing=review)
        product_repo.add(product)

        logger.info(
            "Review submitted" if created else "Review updated",
            review_id=str(review.id),
            product_id=str(product.id),
            user_id=str(user.id),
            rating=review.rating,
        )
        return {"created": created, "review": review.to_summary()}
