"""User API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from shiptrack.domain.enums import UserRole


class UserResponse(BaseModel):
    """User response (no password)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str
    role: UserRole
    created_at: datetime


class PrincipalResponse(BaseModel):
    """Authenticated caller (GET /auth/me, GET /users/me)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str
    role: UserRole


class UpdateRoleRequest(BaseModel):
    role: UserRole
