"""Account registration and sessions: register, login, refresh, logout, revoke.

Each successful register/login/refresh returns a token pair. Refresh tokens
are single-use: exchanging one revokes it.
"""

from datetime import UTC, datetime

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from petshop.domain import petshop
from petshop.identity import tokens
from petshop.identity.events import UserLoggedIn, UserLoggedOut
from petshop.identity.user import Role, User
from petshop.shared.errors import AuthenticationFailed, ConflictError

logger = structlog.get_logger(__name__)


def profile(user: User) -> dict:
    return {
        "id": str(user.id),
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "full_name": user.full_name,
        "roles": [user.role],
        "is_active": user.is_active,
        "created_at": user.created_at.isoformat() if user.created_at else None,
    }


def issue_token_pair(user: User) -> dict:
    """Mint an access token and attach a new refresh token to ``user``.

    The caller saves the user.
    """
    access_token, expires_at = tokens.create_access_token(user.id, user.email, [user.role])
    refresh = user.issue_refresh_token(tokens.new_refresh_token(user.id), tokens.refresh_lifetime())
    return {
        "access_token": access_token,
        "refresh_token": refresh.token,
        "token_type": "bearer",
        "expires_at": expires_at.isoformat(),
        "user": profile(user),
    }


@petshop.command(part_of="User")
class RegisterUser:
    email: String(required=True, max_length=254)
    password_hash: String(required=True, max_length=255)
    first_name: String(required=True, max_length=100)
    last_name: String(required=True, max_length=100)
    role: String(max_length=20)


@petshop.command(part_of="User")
class StartSession:
    user_id: Identifier(required=True)


@petshop.command(part_of="User")
class RefreshSession:
    refresh_token: String(required=True, max_length=255)


@petshop.command(part_of="User")
class Logout:
    user_id: Identifier(required=True)


@petshop.command(part_of="User")
class RevokeRefreshToken:
    refresh_token: String(required=True, max_length=255)


@petshop.command_handler(part_of=User)
class SessionHandler:
    @handle(RegisterUser)
    def register(self, command):
        repo = current_domain.repository_for(User)
        if repo.by_email(command.email):
            raise ConflictError({"email": ["An account with this email already exists"]})

        user = User.register(
            email=command.email,
            password_hash=command.password_hash,
            first_name=command.first_name,
            last_name=command.last_name,
            role=command.role or Role.USER.value,
        )
        pair = issue_token_pair(user)
        repo.add(user)
        logger.info("User registered", user_id=str(user.id), role=user.role)
        return pair

    @handle(StartSession)
    def start_session(self, command):
        repo = current_domain.repository_for(User)
        user = repo.find(command.user_id)
        if not user.is_active:
            raise AuthenticationFailed("Account is disabled")

        pair = issue_token_pair(user)
        user.raise_(UserLoggedIn(user_id=str(user.id), logged_in_at=datetime.now(UTC)))
        repo.add(user)
        return pair

    @handle(RefreshSession)
    def refresh(self, command):
        repo = current_domain.repository_for(User)
        user = repo.by_refresh_token(command.refresh_token)
        refresh = user.find_refresh_token(command.refresh_token) if user else None

        if refresh is None or not refresh.is_usable() or not user.is_active:
            raise AuthenticationFailed("Invalid or expired refresh token")

        user.revoke_refresh_token(command.refresh_token)
        pair = issue_token_pair(user)
        repo.add(user)
        return pair

    @handle(Logout)
    def logout(self, command):
        repo = current_domain.repository_for(User)
        user = repo.find(command.user_id)
        revoked = user.revoke_all_refresh_tokens()
        user.raise_(UserLoggedOut(user_id=str(user.id), logged_out_at=datetime.now(UTC)))
        repo.add(user)
        logger.info("User logged out", user_id=str(user.id), revoked_tokens=revoked)
        return revoked

    @handle(RevokeRefreshToken)
    def revoke(self, command):
        repo = current_domain.repository_for(User)
        user = repo.by_refresh_token(command.refresh_token)
        if user is None or not user.revoke_refresh_token(command.refresh_token):
            raise AuthenticationFailed("Invalid refresh token")
        repo.add(user)


def register(email, password, first_name, last_name, role=None) -> dict:
    """Create an account and return its first token pair.

    The password is hashed before it enters a command.
    """
    return current_domain.process(
        RegisterUser(
            email=email,
            password_hash=tokens.hash_password(password),
            first_name=first_name,
            last_name=last_name,
            role=role,
        ),
        asynchronous=False,
    )


def login(email, password) -> dict:
    """Check credentials and open a session for the user."""
    user = current_domain.repository_for(User).by_email(email)
    if user is None or not user.is_active or not tokens.verify_password(password, user.password_hash):
        logger.info("Login rejected", email=email)
        raise AuthenticationFailed("Invalid email or password")

    return current_domain.process(StartSession(user_id=str(user.id)), asynchronous=False)
