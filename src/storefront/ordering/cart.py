"""Cart item management: commands and handler.

Adding to the cart reserves stock on the product and appends a pending
order line to the user in one unit of work: if appending fails, the stock
decrement is rolled back with it.

Removing a cart item does not give its reserved units back to stock.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.catalogue.stock import stock_lock
from storefront.domain import storefront
from storefront.errors import NotFound
from storefront.identity.principal import load_user
from storefront.identity.user import User

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="User")
class DeleteCartItem:
    user_id = Identifier(required=True)
    line_id = Identifier(required=True)


def add_to_cart(user_id, product_id, quantity):
    """Dispatch ``AddToCart`` while holding the product's stock lock."""
    try:
        current_domain.repository_for(Product).get(str(product_id))
    except ObjectNotFoundError:
        raise NotFound("Product not found") from None

    with stock_lock(product_id):
        return current_domain.process(
            AddToCart(user_id=user_id, product_id=product_id, quantity=quantity),
            asynchronous=False,
        )


@storefront.command_handler(part_of=User)
class ManageCartHandler:
    @handle(AddToCart)
    def reserve_and_add(self, command):
        user = load_user(command.user_id)

        product_repo = current_domain.repository_for(Product)
        try:
            product = product_repo.get(command.product_id)
        except ObjectNotFoundError:
            raise NotFound("Product not found") from None

        product.reserve(command.quantity)
        line = user.add_to_cart(product, command.quantity)

        product_repo.add(product)
        current_domain.repository_for(User).add(user)

        logger.info(
            "Product added to cart",
            user_id=str(user.id),
            product_id=str(product.id),
            line_id=str(line.id),
            quantity=command.quantity,
            remaining_stock=product.quantity,
        )
        return str(line.id)

    @handle(DeleteCartItem)
    def delete_cart_item(self, command):
        user = load_user(command.user_id)
        line = user.remove_cart_item(command.line_id)
        current_domain.repository_for(User).add(user)

        logger.info(
            "Cart item removed; reserved stock not released",
            user_id=str(user.id),
            line_id=str(command.line_id),
            product_id=str(line.product_id),
            quantity=line.quantity,
        )
