"""Read views over customer queries. Newest first."""

from storefront.identity.principal import load_user, require_admin
from storefront.support.customer_query import CustomerQuery
from storefront.utils.repository import fetch_all


def _newest_first(queries):
    return sorted(queries, key=lambda query: query.created_at, reverse=True)


def get_all_queries(admin_id):
    require_admin(admin_id)
    return [query.to_summary() for query in _newest_first(fetch_all(CustomerQuery))]


def get_user_queries(user_id):
    """The queries recorded on ``user_id``'s account."""
    user = load_user(user_id)
    recorded = set(user.queries)
    queries = [query for query in fetch_all(CustomerQuery, user_id=str(user.id)) if str(query.id) in recorded]
    return [query.to_summary() for query in _newest_first(queries)]
