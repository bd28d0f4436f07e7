"""Storefront bounded context: catalogue, reviews, carts and order lines.

A single Protean domain hosts every aggregate so that a stock reservation
and the order line it backs are committed in the same unit of work.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging

configure_logging(log_file_prefix="storefront")

# Domain Composition Root
storefront = Domain(name="storefront")
