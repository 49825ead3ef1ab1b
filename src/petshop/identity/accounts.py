"""Account administration: commands an admin runs against a user account."""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from petshop.domain import petshop
from petshop.identity.user import User

logger = structlog.get_logger(__name__)


@petshop.command(part_of="User")
class DeactivateUser:
    """Disable an account. The user can no longer log in or refresh a session."""

    user_id: Identifier(required=True)


@petshop.command_handler(part_of=User)
class AccountAdministrationHandler:
    @handle(DeactivateUser)
    def deactivate_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.find(command.user_id)
        changed = user.deactivate()
        repo.add(user)
        if changed:
            logger.info("User deactivated", user_id=str(user.id))
        return changed
