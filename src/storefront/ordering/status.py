"""Admin status change: command and handler.

Order lines are stored inside their owners, so finding one by id means
scanning every user's collection (O(users × lines)). The new status is
written without any transition check, and the operation reports success
once the scan completes whether or not a line matched; callers that need
to know can read ``matched`` from the handler's result.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.principal import require_admin
from storefront.identity.user import User
from storefront.utils.repository import fetch_all

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class ChangeStatus:
    admin_id = Identifier(required=True)
    order_id = Identifier(required=True)
    status = String(required=True, max_length=50)


@storefront.command_handler(part_of=User)
class ChangeStatusHandler:
    @handle(ChangeStatus)
    def change_status(self, command):
        require_admin(command.admin_id)

        repo = current_domain.repository_for(User)
        matched = 0
        for user in fetch_all(User):
            if user.overwrite_line_status(command.order_id, command.status):
                repo.add(user)
                matched += 1

        if matched:
            logger.info("Order line status changed", order_id=str(command.order_id), status=command.status)
        else:
            logger.warning("Status change matched no order line", order_id=str(command.order_id))

        return {"matched": matched > 0}
