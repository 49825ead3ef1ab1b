"""FastAPI endpoints for registration, sessions and the current profile."""

from fastapi import APIRouter, Depends, Response
from protean.utils.globals import current_domain

from petshop import config
from petshop.identity import sessions
from petshop.identity.api.schemas import LoginRequest, RefreshTokenRequest, RegisterRequest
from petshop.identity.sessions import Logout, RefreshSession, RevokeRefreshToken
from petshop.identity.user import User
from petshop.shared.envelope import ApiResponse, ok
from petshop.shared.policy import Principal
from petshop.shared.security import current_principal

auth_router = APIRouter(prefix="/api/auth", tags=["auth"])


def _set_access_cookie(response: Response, pair: dict) -> None:
    response.set_cookie(
        key=config.ACCESS_TOKEN_COOKIE,
        value=pair["access_token"],
        httponly=True,
        samesite="lax",
        max_age=config.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


@auth_router.post("/register", status_code=201, response_model=ApiResponse)
async def register(body: RegisterRequest) -> ApiResponse:
    pair = sessions.register(body.email, body.password, body.first_name, body.last_name)
    return ok(pair, "User registered successfully")


@auth_router.post("/login", response_model=ApiResponse)
async def login(body: LoginRequest, response: Response) -> ApiResponse:
    pair = sessions.login(body.email, body.password)
    _set_access_cookie(response, pair)
    return ok(pair, "Login successful")


@auth_router.post("/refresh", response_model=ApiResponse)
async def refresh(body: RefreshTokenRequest, response: Response) -> ApiResponse:
    pair = current_domain.process(RefreshSession(refresh_token=body.refresh_token), asynchronous=False)
    _set_access_cookie(response, pair)
    return ok(pair, "Token refreshed successfully")


@auth_router.post("/logout", response_model=ApiResponse)
async def logout(response: Response, principal: Principal = Depends(current_principal)) -> ApiResponse:
    current_domain.process(Logout(user_id=principal.user_id), asynchronous=False)
    response.delete_cookie(config.ACCESS_TOKEN_COOKIE)
    return ok(True, "Logout successful")


@auth_router.post("/revoke", response_model=ApiResponse)
async def revoke(body: RefreshTokenRequest, _: Principal = Depends(current_principal)) -> ApiResponse:
    current_domain.process(RevokeRefreshToken(refresh_token=body.refresh_token), asynchronous=False)
    return ok(True, "Token revoked successfully")


@auth_router.get("/me", response_model=ApiResponse)
async def me(principal: Principal = Depends(current_principal)) -> ApiResponse:
    user = current_domain.repository_for(User).find(principal.user_id)
    return ok(sessions.profile(user), "User retrieved successfully")
