"""Auth API: register, login, logout and session introspection.

Register/login are rate limited per client address.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from shiptrack.api.v1.dependencies import (
    get_auth_service,
    get_auth_service_for_write,
    get_bearer_token,
    get_current_user,
)
from shiptrack.application.dtos.user import Principal
from shiptrack.application.services import AuthService
from shiptrack.core.limiter import limit_auth
from shiptrack.schemas.auth import (
    ActiveSessionsResponse,
    LoginRequest,
    LogoutAllResponse,
    RegisterRequest,
    TokenResponse,
)
from shiptrack.schemas.user import PrincipalResponse

router = APIRouter()


@router.post("/register", response_model=TokenResponse, status_code=201)
@limit_auth
async def register(
    request: Request,
    body: RegisterRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service_for_write)],
) -> TokenResponse:
    """Create a USER account and return a bearer token for it (409 if email is taken)."""
    result = await auth_service.register(body.email, body.password, body.name)
    return TokenResponse.model_validate(result)


@router.post("/login", response_model=TokenResponse)
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenResponse:
    result = await auth_service.login(body.email, body.password)
    return TokenResponse.model_validate(result)


@router.post("/logout", status_code=204)
async def logout(
    token: Annotated[str, Depends(get_bearer_token)],
    _: Annotated[Principal, Depends(get_current_user)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> Response:
    """Revoke the presented token; other sessions of the user stay active."""
    await auth_service.logout(token)
    return Response(status_code=204)


@router.post("/logout-all", response_model=LogoutAllResponse)
async def logout_all(
    current_user: Annotated[Principal, Depends(get_current_user)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> LogoutAllResponse:
    ended = await auth_service.logout_all(current_user.id)
    return LogoutAllResponse(sessions_ended=ended)


@router.get("/me", response_model=PrincipalResponse)
async def get_me(
    current_user: Annotated[Principal, Depends(get_current_user)],
) -> PrincipalResponse:
    return PrincipalResponse.model_validate(current_user)


@router.get("/sessions", response_model=ActiveSessionsResponse)
async def get_sessions(
    current_user: Annotated[Principal, Depends(get_current_user)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> ActiveSessionsResponse:
    """List the caller's active sessions (reading a session refreshes its TTL)."""
    sessions = await auth_service.get_active_sessions(current_user.id)
    return ActiveSessionsResponse.model_validate(sessions)
