"""Domain tests for the CustomerQuery aggregate."""

import pytest
from protean.exceptions import ValidationError

from storefront.errors import InvalidInput
from storefront.identity.user import User
from storefront.support.customer_query import CustomerQuery
from storefront.support.events import QuerySent


def _send(**overrides):
    user = User.register(name="Jane Doe", email="jane@example.com")
    fields = {
        "name": "Jane",
        "phone": "+1 555 010 0199",
        "email": "Jane.Contact@Example.com",
        "message": "Do you ship to Canada?",
    }
    fields.update(overrides)
    return user, CustomerQuery.send(user, **fields)


class TestSendCustomerQuery:
    def test_send_keeps_form_fields_and_owner(self):
        user, query = _send()
        assert query.user_id == str(user.id)
        assert query.name == "Jane"
        assert query.email == "jane.contact@example.com"
        assert query.created_at is not None

    def test_send_raises_query_sent_with_account_details(self):
        user, query = _send()
        event = query._events[-1]
        assert isinstance(event, QuerySent)
        assert event.query_id == str(query.id)
        assert event.user_name == "Jane Doe"
        assert event.user_email == "jane@example.com"
        assert event.message == "Do you ship to Canada?"

    def test_blank_message_rejected(self):
        with pytest.raises(InvalidInput):
            _send(message="   ")

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _send(email="not-an-email")
        assert "email" in exc.value.messages

    def test_summary(self):
        _, query = _send()
        summary = query.to_summary()
        assert summary["phone"] == "+1 555 010 0199"
        assert summary["message"] == "Do you ship to Canada?"


class TestUserQueryIds:
    def test_register_starts_with_no_queries(self):
        assert User.register(name="Jane Doe", email="jane@example.com").queries == []

    def test_record_query_appends_ids(self):
        user = User.register(name="Jane Doe", email="jane@example.com")
        user.record_query("q-1")
        user.record_query("q-2")
        assert user.queries == ["q-1", "q-2"]
