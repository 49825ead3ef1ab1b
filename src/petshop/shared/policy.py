"""Authorization policy.

Every operation that touches user-owned data receives the acting
``Principal`` explicitly and asks this module whether it may proceed.
"""

from dataclasses import dataclass, field

from petshop.shared.errors import PermissionDenied

ADMIN_ROLE = "Admin"
USER_ROLE = "User"


@dataclass(frozen=True)
class Principal:
    user_id: str
    email: str = ""
    roles: tuple = field(default_factory=tuple)

    @property
    def is_admin(self) -> bool:
        return ADMIN_ROLE in self.roles


def require_admin(principal: Principal) -> Principal:
    if not principal.is_admin:
        raise PermissionDenied("Administrator role required")
    return principal


def is_owner(principal: Principal, owner_id) -> bool:
    return owner_id is not None and str(principal.user_id) == str(owner_id)


def ensure_owner(principal: Principal, owner_id, message="You can only modify your own resources") -> Principal:
    if not is_owner(principal, owner_id):
        raise PermissionDenied(message)
    return principal


def ensure_owner_or_admin(principal: Principal, owner_id) -> Principal:
    if not (principal.is_admin or is_owner(principal, owner_id)):
        raise PermissionDenied("You do not have access to this resource")
    return principal
