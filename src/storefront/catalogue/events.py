"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id = Identifier(required=True)
    title = String(required=True)
    price = Float(required=True)
    quantity = Integer(required=True)
    created_at = DateTime(required=True)


@storefront.event(part_of="Product")
class StockReserved:
    """Units were taken out of stock for a cart line."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    remaining = Integer(required=True)
    reserved_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ProductRatingRecomputed:
    """The product rating was recalculated from its full review set."""

    __version__ = 1

    product_id = Identifier(required=True)
    rating = Float(required=True)
    review_count = Integer(required=True)

