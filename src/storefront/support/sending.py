"""SendQuery: store a customer's question and link it to their account.

The store is told by email once the query is committed; see
``storefront.notifications.query_events``.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.principal import load_user
from storefront.identity.user import User
from storefront.support.customer_query import CustomerQuery

logger = structlog.get_logger(__name__)


@storefront.command(part_of="CustomerQuery")
class SendQuery:
    user_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    phone = String(required=True, max_length=20)
    email = String(required=True, max_length=254)
    message = Text(required=True)


@storefront.command_handler(part_of=CustomerQuery)
class SendQueryHandler:
    @handle(SendQuery)
    def send_query(self, command):
        user = load_user(command.user_id)

        query = CustomerQuery.send(
            user,
            name=command.name,
            phone=command.phone,
            email=command.email,
            message=command.message,
        )
        user.record_query(query.id)

        current_domain.repository_for(CustomerQuery).add(query)
        current_domain.repository_for(User).add(user)

        logger.info("Customer query received", query_id=str(query.id), user_id=str(user.id))
        return str(query.id)
