"""Request-scoped dependencies."""

from fastapi import Header

from storefront.identity.principal import Principal, resolve_principal
from storefront.utils.logging import add_context


async def current_principal(x_user_id: str | None = Header(None)) -> Principal:
    """Resolve the caller from the ``X-User-Id`` header.

    A missing header or an id with no user behind it fails ``Unauthenticated``.
    """
    principal = resolve_principal(x_user_id)
    add_context(user_id=principal.id)
    return principal
