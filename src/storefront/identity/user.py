"""User aggregate: account data plus the user's order lines, reviews and queries.

Order lines live inside the user who owns them: a line belongs to exactly
one user, and every cart or order operation is scoped to that user's own
collection. Admin operations that need a line by id scan all users.
"""

import json
import re
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, String, Text

from storefront.domain import storefront
from storefront.errors import InvalidInput, NotFound
from storefront.identity.events import UserRegistered, UserRoleChanged
from storefront.ordering.events import (
    CartItemRemoved,
    OrderConfirmed,
    OrderLineAdded,
    OrderLineStatusChanged,
)
from storefront.ordering.order_line import LineStatus, OrderLine

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class Role(Enum):
    USER = "user"
    ADMIN = "admin"


@storefront.aggregate
class User:
    name = String(required=True, max_length=100)
    email = String(required=True, max_length=254)
    role = String(choices=Role, default=Role.USER.value)
    order_lines = HasMany(OrderLine)
    review_ids = Text()  # JSON array of review ids
    query_ids = Text()  # JSON array of customer query ids
    created_at = DateTime()

    @invariant.post
    def email_must_be_valid(self):
        if self.email and not _EMAIL_PATTERN.match(self.email):
            raise ValidationError({"email": ["Please enter a valid email"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def register(cls, name, email, role=None):
        now = datetime.now(UTC)
        user = cls(
            name=name,
            email=email.strip().lower(),
            role=role or Role.USER.value,
            review_ids=json.dumps([]),
            query_ids=json.dumps([]),
            created_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                name=user.name,
                email=user.email,
                role=user.role,
                registered_at=now,
            )
        )
        return user

    @property
    def is_admin(self):
        return self.role == Role.ADMIN.value

    def change_role(self, new_role):
        previous_role = self.role
        self.role = new_role
        self.raise_(
            UserRoleChanged(
                user_id=str(self.id),
                previous_role=previous_role,
                new_role=new_role,
            )
        )

    # -------------------------------------------------------------------
    # Reviews
    # -------------------------------------------------------------------
    @property
    def reviews(self):
        return json.loads(self.review_ids) if self.review_ids else []

    def record_review(self, review_id):
        review_ids = self.reviews
        if str(review_id) not in review_ids:
            review_ids.append(str(review_id))
            self.review_ids = json.dumps(review_ids)

    def forget_reviews(self, review_ids):
        """Drop the given review ids. Returns True if any were present."""
        doomed = {str(review_id) for review_id in review_ids}
        kept = [review_id for review_id in self.reviews if review_id not in doomed]
        if len(kept) == len(self.reviews):
            return False
        self.review_ids = json.dumps(kept)
        return True

    # -------------------------------------------------------------------
    # Customer queries
    # -------------------------------------------------------------------
    @property
    def queries(self):
        return json.loads(self.query_ids) if self.query_ids else []

    def record_query(self, query_id):
        query_ids = self.queries
        query_ids.append(str(query_id))
        self.query_ids = json.dumps(query_ids)

    # -------------------------------------------------------------------
    # Cart and order lines
    # -------------------------------------------------------------------
    def find_line(self, line_id):
        return next((line for line in self.order_lines if str(line.id) == str(line_id)), None)

    def cart_lines(self):
        return [line for line in self.order_lines if line.status == LineStatus.PENDING.value]

    def active_lines(self):
        return [line for line in self.order_lines if line.status != LineStatus.PENDING.value]

    def has_purchased(self, product_id):
        return any(str(line.product_id) == str(product_id) and not line.is_pending for line in self.order_lines)

    def add_to_cart(self, product, quantity):
        """Append a pending line carrying a snapshot of the product's name and price."""
        now = datetime.now(UTC)
        line = OrderLine(
            product_id=str(product.id),
            quantity=quantity,
            status=LineStatus.PENDING.value,
            product_name=product.title,
            product_price=product.price,
            added_at=now,
        )
        self.add_order_lines(line)

        self.raise_(
            OrderLineAdded(
                user_id=str(self.id),
                line_id=str(line.id),
                product_id=str(product.id),
                quantity=quantity,
                product_name=product.title,
                product_price=product.price,
                added_at=now,
            )
        )
        return line

    def remove_cart_item(self, line_id):
        line = self.find_line(line_id)
        if line is None:
            raise NotFound("Cart item not found")
        if not line.is_pending:
            raise InvalidInput("Only pending cart items can be removed")

        self.remove_order_lines(line)

        self.raise_(
            CartItemRemoved(
                user_id=str(self.id),
                line_id=str(line_id),
                product_id=str(line.product_id),
                quantity=line.quantity,
            )
        )
        return line

    def confirm(self, new_status):
        """Move every line not already ``processing`` to ``new_status``.

        Lines in ``shipped`` or ``delivered`` are rewritten too; only
        ``processing`` lines are skipped. Returns the changed lines.
        """
        changed = [line for line in self.order_lines if line.status != LineStatus.PROCESSING.value]
        if not changed:
            return []

        for line in changed:
            line.status = new_status

        self.raise_(
            OrderConfirmed(
                user_id=str(self.id),
                status=new_status,
                changed_count=len(changed),
                line_ids=json.dumps([str(line.id) for line in changed]),
                confirmed_at=datetime.now(UTC),
            )
        )
        return changed

    def overwrite_line_status(self, line_id, new_status):
        """Set a line's status without any transition check. Returns False when no line matched."""
        line = self.find_line(line_id)
        if line is None:
            return False

        previous_status = line.status
        line.status = new_status

        self.raise_(
            OrderLineStatusChanged(
                user_id=str(self.id),
                line_id=str(line_id),
                previous_status=previous_status,
                new_status=new_status,
                changed_at=datetime.now(UTC),
            )
        )
        return True

    def drop_lines_for_product(self, product_id):
        """Remove every line referencing ``product_id``. Returns how many were removed."""
        doomed = [line for line in self.order_lines if str(line.product_id) == str(product_id)]
        for line in doomed:
            self.remove_order_lines(line)
        return len(doomed)
