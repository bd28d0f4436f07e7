"""OrderLine entity: one product/quantity entry in a user's cart or order history.

Lifecycle:
    pending → processing | shipped | delivered

``pending`` is the only initial state. Name and price are snapshotted when
the line is created so later catalogue edits do not rewrite order history.
"""

from enum import Enum

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


class LineStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"


# Statuses that count as a placed order in admin reports
FULFILMENT_STATUSES = frozenset(
    {
        LineStatus.PROCESSING.value,
        LineStatus.SHIPPED.value,
        LineStatus.DELIVERED.value,
    }
)


@storefront.entity(part_of="User")
class OrderLine:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    # No choices: the admin status overwrite accepts any value
    status = String(max_length=50, default=LineStatus.PENDING.value)
    product_name = String(max_length=255)
    product_price = Float(min_value=0.0)
    added_at = DateTime()

    @property
    def is_pending(self):
        return self.status == LineStatus.PENDING.value

    def to_summary(self):
        return {
            "id": str(self.id),
            "product_id": str(self.product_id),
            "quantity": self.quantity,
            "status": self.status,
            "product_name": self.product_name,
            "product_price": self.product_price,
            "added_at": self.added_at.isoformat() if self.added_at else None,
        }
