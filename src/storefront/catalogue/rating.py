"""Rating recomputation: the product rating is derived state.

A product's rating is a pure function of its reviews, so it is always
rebuilt from the full review set rather than patched incrementally. The
``RecomputeRating`` command can be replayed at any time to repair a stale
rating.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.errors import NotFound
from storefront.reviews.review import Review
from storefront.utils.repository import fetch_all

logger = structlog.get_logger(__name__)


def ratings_for(product_id, replacing=None):
    """Every review rating of ``product_id``.

    ``replacing`` is a review that was just written in the current unit of
    work; its in-memory copy wins over whatever the repository returns.
    """
    stored = fetch_all(Review, product_id=str(product_id))
    ratings = {str(review.id): review.rating for review in stored}
    if replacing is not None:
        ratings[str(replacing.id)] = replacing.rating
    return list(ratings.values())


def recompute_rating(product, replacing=None):
    """Rebuild ``product.rating`` from its reviews. The caller persists the product."""
    product.apply_ratings(ratings_for(product.id, replacing=replacing))
    logger.info(
        "Product rating recomputed",
        product_id=str(product.id),
        rating=product.rating,
        review_count=product.review_count,
    )
    return product.rating


@storefront.command(part_of="Product")
class RecomputeRating:
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=Product)
class RecomputeRatingHandler:
    @handle(RecomputeRating)
    def recompute(self, command):
        repo = current_domain.repository_for(Product)
        try:
            product = repo.get(command.product_id)
        except ObjectNotFoundError:
            raise NotFound("Product not found") from None

        rating = recompute_rating(product)
        repo.add(product)
        return rating
