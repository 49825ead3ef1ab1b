"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from petshop.domain import petshop


@petshop.event(part_of="User")
class UserRegistered:
    """A new account was created."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)
    role: String(required=True)
    registered_at: DateTime(required=True)


@petshop.event(part_of="User")
class UserLoggedIn:
    __version__ = 1

    user_id: Identifier(required=True)
    logged_in_at: DateTime(required=True)


@petshop.event(part_of="User")
class UserLoggedOut:
    """Every live refresh token of the user was revoked."""

    __version__ = 1

    user_id: Identifier(required=True)
    logged_out_at: DateTime(required=True)


@petshop.event(part_of="User")
class UserDeactivated:
    """An administrator disabled the account and revoked its sessions."""

    __version__ = 1

    user_id: Identifier(required=True)
    deactivated_at: DateTime(required=True)
