"""CustomerQuery aggregate: a question a signed-in user sends to the store.

The contact name, phone and email are whatever the sender typed into the
form; the account that sent it is kept in ``user_id``.
"""

import re
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, Text

from storefront.domain import storefront
from storefront.errors import InvalidInput
from storefront.support.events import QuerySent

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@storefront.aggregate
class CustomerQuery:
    user_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    phone = String(required=True, max_length=20)
    email = String(required=True, max_length=254)
    message = Text(required=True)
    created_at = DateTime()

    @invariant.post
    def email_must_be_valid(self):
        if self.email and not _EMAIL_PATTERN.match(self.email):
            raise ValidationError({"email": ["Please enter a valid email"]})

    @classmethod
    def send(cls, user, name, phone, email, message):
        """Open a query on behalf of ``user`` and announce it."""
        for field, value in (("name", name), ("phone", phone), ("email", email), ("message", message)):
            if value is None or not str(value).strip():
                raise InvalidInput(f"Please enter your {field}")

        now = datetime.now(UTC)
        query = cls(
            user_id=str(user.id),
            name=name.strip(),
            phone=phone.strip(),
            email=email.strip().lower(),
            message=message.strip(),
            created_at=now,
        )
        query.raise_(
            QuerySent(
                query_id=str(query.id),
                user_id=str(user.id),
                user_name=user.name,
                user_email=user.email,
                phone=query.phone,
                message=query.message,
                sent_at=now,
            )
        )
        return query

    def to_summary(self):
        return {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "name": self.name,
            "phone": self.phone,
            "email": self.email,
            "message": self.message,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
