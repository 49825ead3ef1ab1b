"""User aggregate root with its RefreshToken entity."""

from datetime import UTC, datetime, timedelta
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, HasMany, String

from petshop.domain import petshop
from petshop.identity.events import UserDeactivated, UserRegistered


class Role(Enum):
    USER = "User"
    ADMIN = "Admin"


def normalize_email(email) -> str:
    return (email or "").strip().lower()


@petshop.entity(part_of="User")
class RefreshToken:
    """A single-use token that can be exchanged for a fresh token pair."""

    token: String(required=True, max_length=255)
    expires_at: DateTime(required=True)
    is_revoked: Boolean(default=False)
    created_at: DateTime()

    def is_usable(self, now=None) -> bool:
        now = now or datetime.now(UTC)
        return not self.is_revoked and _aware(self.expires_at) > now


def _aware(value):
    return value if value.tzinfo else value.replace(tzinfo=UTC)


@petshop.aggregate
class User:
    """A shop account: customer or administrator."""

    email: String(required=True, max_length=254, unique=True)
    password_hash: String(required=True, max_length=255)
    first_name: String(required=True, max_length=100)
    last_name: String(required=True, max_length=100)
    role: String(choices=Role, default=Role.USER.value)
    is_active: Boolean(default=True)
    refresh_tokens: HasMany(RefreshToken)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def email_must_look_valid(self):
        email = self.email or ""
        local, _, domain = email.partition("@")
        if not local or "." not in domain or " " in email:
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    @classmethod
    def register(cls, email, password_hash, first_name, last_name, role=Role.USER.value):
        now = datetime.now(UTC)
        user = cls(
            email=normalize_email(email),
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            role=role,
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                email=user.email,
                role=role,
                registered_at=now,
            )
        )
        return user

    def deactivate(self) -> bool:
        """Disable the account and revoke every live refresh token.

        Returns False when the account was already inactive.
        """
        if not self.is_active:
            return False

        now = datetime.now(UTC)
        self.is_active = False
        self.updated_at = now
        self.revoke_all_refresh_tokens()
        self.raise_(UserDeactivated(user_id=str(self.id), deactivated_at=now))
        return True

    # -------------------------------------------------------------------
    # Refresh tokens
    # -------------------------------------------------------------------
    def issue_refresh_token(self, token, lifetime: timedelta) -> RefreshToken:
        now = datetime.now(UTC)
        # Revoked and expired tokens can never be exchanged again
        for spent in [t for t in self.refresh_tokens if not t.is_usable(now)]:
            self.remove_refresh_tokens(spent)

        refresh = RefreshToken(token=token, expires_at=now + lifetime, created_at=now)
        self.add_refresh_tokens(refresh)
        return refresh

    def find_refresh_token(self, token) -> RefreshToken | None:
        return next((t for t in self.refresh_tokens if t.token == token), None)

    def revoke_refresh_token(self, token) -> bool:
        refresh = self.find_refresh_token(token)
        if refresh is None or refresh.is_revoked:
            return False
        refresh.is_revoked = True
        self.add_refresh_tokens(refresh)
        return True

    def revoke_all_refresh_tokens(self) -> int:
        revoked = 0
        for refresh in self.refresh_tokens:
            if not refresh.is_revoked:
                refresh.is_revoked = True
                self.add_refresh_tokens(refresh)
                revoked += 1
        return revoked
