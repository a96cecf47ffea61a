"""Auth API schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from shiptrack.schemas.user import UserResponse


class RegisterRequest(BaseModel):
    """Request body for public registration. New accounts get role USER."""

    email: EmailStr
    password: str = Field(..., min_length=6, max_length=50)
    name: str = Field(..., min_length=2, max_length=100)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=50)


class TokenResponse(BaseModel):
    """JWT token response with the signed-in user."""

    model_config = ConfigDict(from_attributes=True)

    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class LogoutAllResponse(BaseModel):
    sessions_ended: int


class SessionResponse(BaseModel):
    """One session record. Timestamps are Unix epoch milliseconds."""

    model_config = ConfigDict(from_attributes=True)

    user_id: str
    email: str
    role: str
    created_at: int
    last_activity: int


class ActiveSessionsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    count: int = Field(..., description="Tokens registered for the user")
    sessions: list[SessionResponse]
