"""Read views over user accounts."""

from storefront.identity.principal import load_user, require_admin
from storefront.identity.user import User
from storefront.utils.repository import fetch_all


def user_summary(user):
    return {
        "id": str(user.id),
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "review_ids": user.reviews,
        "query_ids": user.queries,
        "created_at": user.created_at.isoformat() if user.created_at else None,
    }


def get_user_info(user_id):
    return user_summary(load_user(user_id))


def list_users(admin_id):
    require_admin(admin_id)
    users = fetch_all(User)
    return [user_summary(user) for user in sorted(users, key=lambda user: user.created_at)]
