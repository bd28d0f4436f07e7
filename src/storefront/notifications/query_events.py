"""New query email: reacts to QuerySent.

The store inbox is ``STORE_ADMIN_EMAIL``. Without it there is nobody to
tell and the query is only stored. Delivery is fire-and-forget.
"""

import os

import structlog
from protean import handle

from storefront.domain import storefront
from storefront.notifications.channel import get_mailer
from storefront.notifications.templates import NEW_QUERY
from storefront.support.customer_query import CustomerQuery
from storefront.support.events import QuerySent

logger = structlog.get_logger(__name__)


@storefront.event_handler(part_of=CustomerQuery)
class NewQueryMailer:
    @handle(QuerySent)
    def on_query_sent(self, event: QuerySent) -> None:
        store_email = os.environ.get("STORE_ADMIN_EMAIL")
        if not store_email:
            logger.warning("STORE_ADMIN_EMAIL not set; query email skipped", query_id=str(event.query_id))
            return

        data = {
            "name": event.user_name,
            "phone": event.phone,
            "email": event.user_email,
            "message": event.message,
        }
        try:
            result = get_mailer().send(
                to=store_email.lower(),
                subject="New Query",
                template=NEW_QUERY,
                data=data,
            )
        except Exception as e:
            logger.error("Query email failed", query_id=str(event.query_id), error=str(e))
            return

        if result.get("status") == "sent":
            logger.info("Query email sent", query_id=str(event.query_id), message_id=result.get("message_id"))
        else:
            logger.warning("Query email not delivered", query_id=str(event.query_id), error=result.get("error"))
