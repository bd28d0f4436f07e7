"""Principal resolution: who is making a request, and may they do it."""

from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.errors import Unauthenticated, Unauthorized
from storefront.identity.user import Role, User


@dataclass(frozen=True)
class Principal:
    id: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value


def load_user(user_id) -> User:
    """Load the acting user, failing ``Unauthenticated`` when there is none."""
    if not user_id:
        raise Unauthenticated()
    try:
        return current_domain.repository_for(User).get(str(user_id))
    except ObjectNotFoundError:
        raise Unauthenticated("No user found for the supplied credentials") from None


def resolve_principal(user_id) -> Principal:
    user = load_user(user_id)
    return Principal(id=str(user.id), role=user.role)


def require_admin(user_id) -> User:
    """Load the acting user and insist on the admin role."""
    user = load_user(user_id)
    if not user.is_admin:
        raise Unauthorized()
    return user
