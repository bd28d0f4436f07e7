"""Domain tests for the User aggregate: registration, roles and review ids."""

import pytest
from protean.exceptions import ValidationError

from storefront.identity.events import UserRegistered, UserRoleChanged
from storefront.identity.user import Role, User


def _user(**overrides):
    defaults = {"name": "Jane Doe", "email": "Jane@Example.com"}
    defaults.update(overrides)
    return User.register(**defaults)


class TestUserRegistration:
    def test_register_defaults_to_user_role(self):
        user = _user()
        assert user.role == Role.USER.value
        assert not user.is_admin

    def test_register_normalises_email(self):
        assert _user().email == "jane@example.com"

    def test_register_starts_with_no_lines_or_reviews(self):
        user = _user()
        assert user.order_lines == []
        assert user.reviews == []

    def test_register_raises_user_registered(self):
        user = _user()
        event = user._events[-1]
        assert isinstance(event, UserRegistered)
        assert event.email == "jane@example.com"
        assert event.role == "user"

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _user(email="not-an-email")
        assert "email" in exc.value.messages

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError):
            _user(role="superuser")


class TestRoleChange:
    def test_change_to_admin(self):
        user = _user()
        user.change_role(Role.ADMIN.value)
        assert user.is_admin

    def test_change_raises_event(self):
        user = _user()
        user._events.clear()
        user.change_role("admin")
        event = user._events[-1]
        assert isinstance(event, UserRoleChanged)
        assert event.previous_role == "user"
        assert event.new_role == "admin"


class TestReviewIds:
    def test_record_review_once(self):
        user = _user()
        user.record_review("rev-1")
        user.record_review("rev-1")
        assert user.reviews == ["rev-1"]

    def test_forget_reviews(self):
        user = _user()
        user.record_review("rev-1")
        user.record_review("rev-2")
        assert user.forget_reviews(["rev-1"]) is True
        assert user.reviews == ["rev-2"]

    def test_forget_unknown_reviews_reports_no_change(self):
        user = _user()
        user.record_review("rev-1")
        assert user.forget_reviews(["rev-9"]) is False
        assert user.reviews == ["rev-1"]
