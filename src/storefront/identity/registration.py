"""User registration and role management: commands and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.errors import Conflict, NotFound
from storefront.identity.principal import require_admin
from storefront.identity.user import Role, User

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class RegisterUser:
    name = String(required=True, max_length=100)
    email = String(required=True, max_length=254)
    role = String(max_length=20)


@storefront.command(part_of="User")
class ChangeUserRole:
    admin_id = Identifier(required=True)
    user_id = Identifier(required=True)
    role = String(required=True, max_length=20)


@storefront.command_handler(part_of=User)
class UserAccountHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        email = command.email.strip().lower()

        if repo._dao.query.filter(email=email).all().items:
            raise Conflict("Email already exists")

        user = User.register(name=command.name, email=email, role=command.role)
        repo.add(user)

        logger.info("User registered", user_id=str(user.id), role=user.role)
        return str(user.id)

    @handle(ChangeUserRole)
    def change_user_role(self, command):
        require_admin(command.admin_id)

        repo = current_domain.repository_for(User)
        try:
            user = repo.get(command.user_id)
        except ObjectNotFoundError:
            raise NotFound("User not found") from None

        user.change_role(command.role)
        repo.add(user)

        logger.info("User role changed", user_id=str(user.id), role=command.role, admin_id=str(command.admin_id))


def register_admin(name, email):
    """Register a user with the admin role. Only reachable from the management CLI."""
    command = RegisterUser(name=name, email=email, role=Role.ADMIN.value)
    return current_domain.process(command, asynchronous=False)
