"""Users API: current user and admin user management."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from shiptrack.api.v1.dependencies import (
    get_current_user,
    get_user_service,
    get_user_service_for_write,
    require_admin,
)
from shiptrack.application.dtos.user import Principal
from shiptrack.application.services import UserService
from shiptrack.schemas.user import PrincipalResponse, UpdateRoleRequest, UserResponse

router = APIRouter()


@router.get("/me", response_model=PrincipalResponse)
async def get_me(
    current_user: Annotated[Principal, Depends(get_current_user)],
) -> PrincipalResponse:
    return PrincipalResponse.model_validate(current_user)


@router.get("", response_model=list[UserResponse])
async def list_users(
    _: Annotated[Principal, Depends(require_admin)],
    user_service: Annotated[UserService, Depends(get_user_service)],
) -> list[UserResponse]:
    """All users, newest first (admin only)."""
    users = await user_service.list_users()
    return [UserResponse.model_validate(u) for u in users]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    _: Annotated[Principal, Depends(require_admin)],
    user_service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    user = await user_service.get_user(user_id)
    return UserResponse.model_validate(user)


@router.patch("/{user_id}/role", response_model=UserResponse)
async def update_role(
    user_id: str,
    body: UpdateRoleRequest,
    _: Annotated[Principal, Depends(require_admin)],
    user_service: Annotated[UserService, Depends(get_user_service_for_write)],
) -> UserResponse:
    """Change a user's role; the user's sessions end so the new role applies on next login."""
    user = await user_service.update_role(user_id, body.role)
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", status_code=204)
async def delete_user(
    user_id: str,
    _: Annotated[Principal, Depends(require_admin)],
    user_service: Annotated[UserService, Depends(get_user_service_for_write)],
) -> Response:
    """Delete a user and their orders; their sessions end."""
    await user_service.delete_user(user_id)
    return Response(status_code=204)
