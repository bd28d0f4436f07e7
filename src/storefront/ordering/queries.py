"""Per-user views of order lines."""

from storefront.identity.principal import load_user


def get_user_cart(user_id):
    """Lines still in the cart (status ``pending``)."""
    return [line.to_summary() for line in load_user(user_id).cart_lines()]


def get_active_orders(user_id):
    """Lines that have left the cart (any status other than ``pending``)."""
    return [line.to_summary() for line in load_user(user_id).active_lines()]
