"""Domain events for order lines held by the User aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="User")
class OrderLineAdded:
    """A product was added to the user's cart as a pending order line."""

    __version__ = 1

    user_id = Identifier(required=True)
    line_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    product_name = String(required=True)
    product_price = Float(required=True)
    added_at = DateTime(required=True)


@storefront.event(part_of="User")
class CartItemRemoved:
    """A pending line was removed from the cart. Reserved stock is not restored."""

    __version__ = 1

    user_id = Identifier(required=True)
    line_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.event(part_of="User")
class OrderConfirmed:
    """The user's lines were bulk-moved to a new status."""

    __version__ = 1

    user_id = Identifier(required=True)
    status = String(required=True)
    changed_count = Integer(required=True)
    line_ids = Text(required=True)  # JSON array of line ids
    confirmed_at = DateTime(required=True)


@storefront.event(part_of="User")
class OrderLineStatusChanged:
    """An administrator overwrote the status of a single line."""

    __version__ = 1

    user_id = Identifier(required=True)
    line_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)
