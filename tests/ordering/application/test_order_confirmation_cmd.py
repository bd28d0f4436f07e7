"""Application tests for ConfirmOrder and the admin status change."""

import pytest
from protean import current_domain

from storefront.errors import Unauthorized
from storefront.identity.user import User
from storefront.ordering.cart import add_to_cart
from storefront.ordering.confirmation import ConfirmOrder
from storefront.ordering.status import ChangeStatus


def _confirm(user_id, status="processing"):
    return current_domain.process(ConfirmOrder(user_id=user_id, status=status), asynchronous=False)


def _statuses(user_id):
    user = current_domain.repository_for(User).get(user_id)
    return sorted(line.status for line in user.order_lines)


class TestConfirmOrderCommand:
    def test_confirm_moves_cart_to_processing(self, customer_id, create_product):
        product_id = create_product(quantity=5)
        add_to_cart(customer_id, product_id, 1)
        add_to_cart(customer_id, product_id, 2)

        result = _confirm(customer_id)

        assert result["changed_count"] == 2
        assert len(result["lines"]) == 2
        assert _statuses(customer_id) == ["processing", "processing"]

    def test_confirm_twice_changes_nothing_the_second_time(self, customer_id, create_product):
        add_to_cart(customer_id, create_product(), 1)
        _confirm(customer_id)

        result = _confirm(customer_id)

        assert result["changed_count"] == 0
        assert result["message"].startswith("No changes")
        assert [line["status"] for line in result["lines"]] == ["processing"]

    def test_confirm_with_empty_collection_succeeds(self, customer_id):
        result = _confirm(customer_id)
        assert result["changed_count"] == 0
        assert result["lines"] == []

    def test_confirm_overwrites_shipped_lines(self, admin_id, customer_id, create_product):
        product_id = create_product(quantity=5)
        shipped = add_to_cart(customer_id, product_id, 1)
        _confirm(customer_id)
        current_domain.process(
            ChangeStatus(admin_id=admin_id, order_id=shipped, status="shipped"),
            asynchronous=False,
        )
        add_to_cart(customer_id, product_id, 1)

        result = _confirm(customer_id)

        assert result["changed_count"] == 2
        assert _statuses(customer_id) == ["processing", "processing"]

    def test_confirm_twice_with_shipped_rewrites_both_times(self, customer_id, create_product):
        add_to_cart(customer_id, create_product(quantity=5), 1)
        first = _confirm(customer_id, "shipped")

        second = _confirm(customer_id, "shipped")

        assert first["changed_count"] == 1
        assert second["changed_count"] == 1
        assert [line["status"] for line in second["lines"]] == ["shipped"]
        assert _statuses(customer_id) == ["shipped"]

    def test_status_defaults_to_processing(self, customer_id, create_product):
        add_to_cart(customer_id, create_product(), 1)

        command = ConfirmOrder(user_id=customer_id)
        current_domain.process(command, asynchronous=False)

        assert command.status == "processing"
        assert _statuses(customer_id) == ["processing"]


class TestChangeStatusCommand:
    def test_admin_changes_line_status(self, admin_id, customer_id, create_product):
        line_id = add_to_cart(customer_id, create_product(), 1)
        _confirm(customer_id)

        result = current_domain.process(
            ChangeStatus(admin_id=admin_id, order_id=line_id, status="delivered"),
            asynchronous=False,
        )

        assert result == {"matched": True}
        assert _statuses(customer_id) == ["delivered"]

    def test_unknown_order_id_still_succeeds(self, admin_id, customer_id, create_product):
        add_to_cart(customer_id, create_product(), 1)

        result = current_domain.process(
            ChangeStatus(admin_id=admin_id, order_id="no-such-line", status="shipped"),
            asynchronous=False,
        )

        assert result == {"matched": False}
        assert _statuses(customer_id) == ["pending"]

    def test_customer_cannot_change_status(self, customer_id, create_product):
        line_id = add_to_cart(customer_id, create_product(), 1)
        with pytest.raises(Unauthorized):
            current_domain.process(
                ChangeStatus(admin_id=customer_id, order_id=line_id, status="shipped"),
                asynchronous=False,
            )
        assert _statuses(customer_id) == ["pending"]

    def test_status_change_reaches_every_user_beyond_one_page(self, admin_id, register, create_product):
        product_id = create_product(quantity=200)
        customers = [register(name=f"Customer {n}", email=f"customer{n}@example.com") for n in range(103)]
        line_ids = [add_to_cart(customer, product_id, 1) for customer in customers]

        for line_id in line_ids:
            result = current_domain.process(
                ChangeStatus(admin_id=admin_id, order_id=line_id, status="shipped"),
                asynchronous=False,
            )
            assert result == {"matched": True}

        assert all(_statuses(customer) == ["shipped"] for customer in customers)
