"""FastAPI dependencies that resolve the acting principal for a request.

An access token is accepted from the ``Authorization: Bearer`` header or,
failing that, from the ``access_token`` cookie.
"""

from fastapi import Depends, Request

from petshop import config
from petshop.identity.tokens import decode_access_token
from petshop.shared.errors import AuthenticationFailed
from petshop.shared.policy import Principal, require_admin


def _token_from(request: Request) -> str | None:
    header = request.headers.get("Authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return request.cookies.get(config.ACCESS_TOKEN_COOKIE)


def principal_from_token(token: str) -> Principal:
    claims = decode_access_token(token)
    return Principal(
        user_id=str(claims["sub"]),
        email=claims.get("email", ""),
        roles=tuple(claims.get("roles") or ()),
    )


async def current_principal(request: Request) -> Principal:
    token = _token_from(request)
    if not token:
        raise AuthenticationFailed("Authentication required")
    return principal_from_token(token)


async def optional_principal(request: Request) -> Principal | None:
    """The principal when a valid token is present, otherwise None."""
    token = _token_from(request)
    if not token:
        return None
    try:
        return principal_from_token(token)
    except AuthenticationFailed:
        return None


async def admin_principal(principal: Principal = Depends(current_principal)) -> Principal:
    return require_admin(principal)
