"""Application tests for adding to and removing from the cart."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from storefront.catalogue.product import Product
from storefront.catalogue.stock import has_stock_lock
from storefront.errors import InsufficientStock, InvalidInput, NotFound, Unauthenticated
from storefront.identity.user import User
from storefront.ordering.cart import DeleteCartItem, add_to_cart
from storefront.ordering.queries import get_active_orders, get_user_cart


def _stock(product_id):
    return current_domain.repository_for(Product).get(product_id).quantity


def _lines(user_id):
    return current_domain.repository_for(User).get(user_id).order_lines


class TestAddToCart:
    def test_reserves_stock_and_appends_line(self, customer_id, create_product):
        product_id = create_product(quantity=5, price=20.0)

        line_id = add_to_cart(customer_id, product_id, 3)

        assert _stock(product_id) == 2
        lines = _lines(customer_id)
        assert len(lines) == 1
        assert str(lines[0].id) == line_id
        assert lines[0].status == "pending"
        assert lines[0].product_price == 20.0

    def test_stock_five_three_then_three_fails(self, customer_id, create_product):
        product_id = create_product(quantity=5)

        add_to_cart(customer_id, product_id, 3)
        assert _stock(product_id) == 2

        with pytest.raises(InsufficientStock):
            add_to_cart(customer_id, product_id, 3)

        assert _stock(product_id) == 2
        assert len(_lines(customer_id)) == 1

    def test_zero_quantity_rejected(self, customer_id, create_product):
        product_id = create_product(quantity=5)
        with pytest.raises((ValidationError, InvalidInput)):
            add_to_cart(customer_id, product_id, 0)
        assert _stock(product_id) == 5

    def test_unknown_product(self, customer_id):
        with pytest.raises(NotFound):
            add_to_cart(customer_id, "missing-product", 1)
        assert not has_stock_lock("missing-product")

    def test_unknown_user(self, create_product):
        product_id = create_product(quantity=5)
        with pytest.raises(Unauthenticated):
            add_to_cart("missing-user", product_id, 1)
        assert _stock(product_id) == 5


class TestDeleteCartItem:
    def test_removes_line_without_releasing_stock(self, customer_id, create_product):
        product_id = create_product(quantity=5)
        line_id = add_to_cart(customer_id, product_id, 2)

        current_domain.process(DeleteCartItem(user_id=customer_id, line_id=line_id), asynchronous=False)

        assert _lines(customer_id) == []
        assert _stock(product_id) == 3

    def test_unknown_line(self, customer_id):
        with pytest.raises(NotFound):
            current_domain.process(DeleteCartItem(user_id=customer_id, line_id="missing"), asynchronous=False)

    def test_other_users_line_is_not_found(self, register, customer_id, create_product):
        other_id = register(name="John Roe", email="john@example.com")
        line_id = add_to_cart(customer_id, create_product(), 1)

        with pytest.raises(NotFound):
            current_domain.process(DeleteCartItem(user_id=other_id, line_id=line_id), asynchronous=False)
        assert len(_lines(customer_id)) == 1


class TestCartViews:
    def test_cart_shows_pending_lines_only(self, customer_id, create_product):
        from storefront.ordering.confirmation import ConfirmOrder

        product_id = create_product(quantity=5)
        add_to_cart(customer_id, product_id, 1)
        current_domain.process(ConfirmOrder(user_id=customer_id), asynchronous=False)
        add_to_cart(customer_id, product_id, 2)

        cart = get_user_cart(customer_id)
        active = get_active_orders(customer_id)

        assert [line["quantity"] for line in cart] == [2]
        assert [line["status"] for line in active] == ["processing"]
