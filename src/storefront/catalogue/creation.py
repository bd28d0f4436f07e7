"""Product creation: command and handler."""

import structlog
from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.identity.principal import require_admin

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class CreateProduct:
    admin_id = Identifier(required=True)
    title = String(required=True, max_length=255)
    description = Text(required=True)
    price = Float(required=True)
    quantity = Integer(default=0)
    image = String(max_length=500)


@storefront.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        require_admin(command.admin_id)

        product = Product.create(
            title=command.title,
            description=command.description,
            price=command.price,
            quantity=command.quantity if command.quantity is not None else 0,
            image=command.image,
        )
        current_domain.repository_for(Product).add(product)

        logger.info("Product created", product_id=str(product.id), quantity=product.quantity)
        return str(product.id)
