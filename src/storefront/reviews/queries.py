"""Read views over the review ledger. Newest first."""

from storefront.errors import InvalidInput, NotFound
from storefront.reviews.review import Review
from storefront.utils.repository import fetch_all

DEFAULT_PAGE_SIZE = 10


def _newest_first(reviews):
    return sorted(reviews, key=lambda review: review.created_at, reverse=True)


def list_reviews(product_id, page=1, page_size=DEFAULT_PAGE_SIZE):
    """One page of a product's reviews."""
    if page is None or page < 1:
        raise InvalidInput("Page number must be 1 or greater")
    if page_size is None or page_size < 1:
        raise InvalidInput("Page size must be 1 or greater")

    reviews = fetch_all(Review, product_id=str(product_id))
    start = (page - 1) * page_size
    selected = _newest_first(reviews)[start : start + page_size]
    if not selected:
        raise NotFound("No reviews found")

    return {
        "reviews": [review.to_summary() for review in selected],
        "page": page,
        "page_size": page_size,
        "total": len(reviews),
    }


def list_all_reviews(limit=DEFAULT_PAGE_SIZE):
    if limit is None or limit < 1:
        raise InvalidInput("Limit must be 1 or greater")

    reviews = fetch_all(Review)
    selected = _newest_first(reviews)[:limit]
    if not selected:
        raise NotFound("No reviews found")
    return [review.to_summary() for review in selected]
