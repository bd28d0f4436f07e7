"""Admin order report: every user's placed order lines.

Lines are grouped by owner and filtered to the fulfilment statuses. The
per-user total adds up each line's snapshotted price; quantities are not
multiplied in.
"""

from storefront.errors import NoOrders
from storefront.identity.principal import require_admin
from storefront.identity.user import User
from storefront.ordering.order_line import FULFILMENT_STATUSES
from storefront.utils.repository import fetch_all


def get_all_orders(admin_id):
    require_admin(admin_id)

    users = fetch_all(User)
    users = sorted(users, key=lambda user: user.created_at)

    orders = []
    for user in users:
        lines = [line for line in user.order_lines if line.status in FULFILMENT_STATUSES]
        if not lines:
            continue
        orders.append(
            {
                "user_id": str(user.id),
                "user_name": user.name,
                "lines": [line.to_summary() for line in lines],
                "total_price": sum(line.product_price or 0 for line in lines),
            }
        )

    if not orders:
        raise NoOrders()
    return orders
