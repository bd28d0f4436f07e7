"""Whole-collection reads over Protean repositories."""

from protean.utils.globals import current_domain

# DAO queries are capped at the aggregate's page limit, so scans walk pages
SCAN_PAGE_SIZE = 100


def fetch_all(aggregate_cls, **filters):
    """Every stored ``aggregate_cls`` matching ``filters``, across all pages."""
    query = current_domain.repository_for(aggregate_cls)._dao.query
    if filters:
        query = query.filter(**filters)
    query = query.order_by("id")

    items = []
    offset = 0
    while True:
        page = query.offset(offset).limit(SCAN_PAGE_SIZE).all()
        items.extend(page.items)
        offset += len(page.items)
        if not page.items or offset >= page.total:
            return items
