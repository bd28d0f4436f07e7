"""BDD tests for stock reservation through the cart."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, scenarios, then, when

from storefront.catalogue.product import Product
from storefront.errors import InsufficientStock
from storefront.ordering.cart import DeleteCartItem, add_to_cart
from storefront.ordering.queries import get_user_cart

scenarios("features/stock_reservation.feature")


@pytest.fixture()
def outcome():
    """Container for the last line added and any refusal."""
    return {"line_id": None, "error": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse("a product with {quantity:d} units in stock"), target_fixture="product_id")
def product_in_stock(create_product, quantity):
    return create_product(quantity=quantity)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.re(r"the shopper adds (?P<quantity>\d+) (?:more )?units to the cart"))
def shopper_adds(customer_id, product_id, outcome, quantity):
    try:
        outcome["line_id"] = add_to_cart(customer_id, product_id, int(quantity))
    except InsufficientStock as exc:
        outcome["error"] = exc


@when("the shopper removes that line from the cart")
def shopper_removes(customer_id, outcome):
    current_domain.process(
        DeleteCartItem(user_id=customer_id, line_id=outcome["line_id"]),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the reservation is refused for insufficient stock")
def reservation_refused(outcome):
    assert isinstance(outcome["error"], InsufficientStock)


@then(parsers.cfparse("the product has {quantity:d} units in stock"))
def product_stock(product_id, quantity):
    assert current_domain.repository_for(Product).get(product_id).quantity == quantity


@then(parsers.re(r"the shopper's cart holds (?P<count>\d+) lines?"))
def cart_holds(customer_id, count):
    assert len(get_user_cart(customer_id)) == int(count)
