"""Order confirmation: command and handler.

Confirmation is a bulk operation over the user's whole collection: every
line that is not already ``processing`` moves to the requested status.
That includes lines already ``shipped`` or ``delivered``, which are
rewritten; running it twice with the same status changes those lines
both times.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.principal import load_user
from storefront.identity.user import User
from storefront.ordering.order_line import LineStatus

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class ConfirmOrder:
    user_id = Identifier(required=True)
    status = String(max_length=50, default=LineStatus.PROCESSING.value)


@storefront.command_handler(part_of=User)
class ConfirmOrderHandler:
    @handle(ConfirmOrder)
    def confirm_order(self, command):
        user = load_user(command.user_id)
        changed = user.confirm(command.status)

        if not changed:
            logger.info("Order confirmation made no changes", user_id=str(user.id))
            return {
                "changed_count": 0,
                "message": "No changes: every line is already processing",
                "lines": [line.to_summary() for line in user.order_lines],
            }

        current_domain.repository_for(User).add(user)

        logger.info(
            "Order confirmed",
            user_id=str(user.id),
            status=command.status,
            changed_count=len(changed),
        )
        return {
            "changed_count": len(changed),
            "message": f"{len(changed)} order line(s) moved to {command.status}",
            "lines": [line.to_summary() for line in changed],
        }
