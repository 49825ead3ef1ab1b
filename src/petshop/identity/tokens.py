"""Password hashing and token issuance.

Access tokens are short-lived HS256 JWTs. Refresh tokens are opaque
strings of the form ``{user_id}.{secret}`` stored on the User aggregate,
so a presented token leads straight to its owner.
"""

import secrets
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from petshop import config
from petshop.shared.errors import AuthenticationFailed

_pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return _pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    if not password or not password_hash:
        return False
    return _pwd_context.verify(password, password_hash)


def create_access_token(user_id, email, roles, now=None) -> tuple[str, datetime]:
    now = now or datetime.now(UTC)
    expires_at = now + timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {
        "sub": str(user_id),
        "email": email,
        "roles": list(roles),
        "iat": int(now.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    token = jwt.encode(claims, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)
    return token, expires_at


def decode_access_token(token: str) -> dict:
    """Verify signature and expiry, returning the claims."""
    try:
        claims = jwt.decode(token, config.JWT_SECRET_KEY, algorithms=[config.JWT_ALGORITHM])
    except JWTError as exc:
        raise AuthenticationFailed("Invalid or expired token") from exc

    if not claims.get("sub"):
        raise AuthenticationFailed("Invalid or expired token")
    return claims


def new_refresh_token(user_id) -> str:
    return f"{user_id}.{secrets.token_urlsafe(48)}"


def refresh_token_owner(token: str) -> str:
    user_id, sep, secret = (token or "").partition(".")
    if not sep or not user_id or not secret:
        raise AuthenticationFailed("Invalid refresh token")
    return user_id


def refresh_lifetime() -> timedelta:
    return timedelta(days=config.REFRESH_TOKEN_EXPIRE_DAYS)
