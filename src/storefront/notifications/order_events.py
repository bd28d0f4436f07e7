"""Order confirmation email: reacts to OrderConfirmed.

Delivery is fire-and-forget: a failed or raising mailer is logged and
never rolls back the confirmation that triggered it.
"""

import json
import os

import structlog
from protean import handle
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user import User
from storefront.notifications.channel import get_mailer
from storefront.notifications.templates import ORDER_CONFIRMATION
from storefront.ordering.events import OrderConfirmed

logger = structlog.get_logger(__name__)


def _recipients(user):
    recipients = [user.email]
    admin_email = os.environ.get("STORE_ADMIN_EMAIL")
    if admin_email and admin_email.lower() != user.email:
        recipients.append(admin_email.lower())
    return recipients


@storefront.event_handler(part_of=User)
class OrderConfirmationMailer:
    @handle(OrderConfirmed)
    def on_order_confirmed(self, event: OrderConfirmed) -> None:
        try:
            user = current_domain.repository_for(User).get(event.user_id)
        except Exception:
            logger.error("Failed to load user for order confirmation", user_id=str(event.user_id))
            return

        line_ids = set(json.loads(event.line_ids))
        data = {
            "name": user.name,
            "status": event.status,
            "changed_count": event.changed_count,
            "lines": [line.to_summary() for line in user.order_lines if str(line.id) in line_ids],
        }

        mailer = get_mailer()
        for recipient in _recipients(user):
            try:
                result = mailer.send(
                    to=recipient,
                    subject="Order Confirmed",
                    template=ORDER_CONFIRMATION,
                    data=data,
                )
            except Exception as e:
                logger.error("Order confirmation email failed", user_id=str(user.id), to=recipient, error=str(e))
                continue

            if result.get("status") == "sent":
                logger.info(
                    "Order confirmation email sent",
                    user_id=str(user.id),
                    to=recipient,
                    message_id=result.get("message_id"),
                )
            else:
                logger.warning(
                    "Order confirmation email not delivered",
                    user_id=str(user.id),
                    to=recipient,
                    error=result.get("error"),
                )
