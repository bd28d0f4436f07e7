"""Product deletion: command and handler.

A product is removed only after everything that references it is gone:
its reviews, those reviews' ids in each author's review list, and every
order line pointing at it in any user's collection.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.catalogue.stock import discard_stock_lock
from storefront.domain import storefront
from storefront.errors import NotFound
from storefront.identity.principal import require_admin
from storefront.identity.user import User
from storefront.reviews.review import Review
from storefront.utils.repository import fetch_all

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class DeleteProduct:
    admin_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=Product)
class DeleteProductHandler:
    @handle(DeleteProduct)
    def delete_product(self, command):
        require_admin(command.admin_id)

        product_repo = current_domain.repository_for(Product)
        try:
            product = product_repo.get(command.product_id)
        except ObjectNotFoundError:
            raise NotFound("Product not found") from None

        product_id = str(product.id)
        review_repo = current_domain.repository_for(Review)
        reviews = fetch_all(Review, product_id=product_id)
        review_ids = [str(review.id) for review in reviews]

        user_repo = current_domain.repository_for(User)
        lines_removed = 0
        for user in fetch_all(User):
            dropped = user.drop_lines_for_product(product_id)
            forgot = user.forget_reviews(review_ids)
            if dropped or forgot:
                lines_removed += dropped
                user_repo.add(user)

        for review in reviews:
            review_repo.remove(review)

        product_repo.remove(product)

        logger.info(
            "Product deleted",
            product_id=product_id,
            reviews_removed=len(reviews),
            order_lines_removed=lines_removed,
        )
        discard_stock_lock(product_id)
        return {"reviews_removed": len(reviews), "order_lines_removed": lines_removed}
