"""Request/response schemas for account endpoints and token claims."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

# Request fields are optional; the services report missing values as 400.


class RegisterRequest(BaseModel):
    """Body of POST /users/register."""

    username: str | None = Field(default=None, description="Unique login name")
    name: str | None = Field(default=None, description="Display name")
    email: str | None = Field(default=None, description="Unique email (case-insensitive)")
    password: str | None = Field(default=None, description="Plain-text password; never stored")
    role: str | None = Field(default=None, description="ADMIN, USER or OTHER (default USER)")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str | None = Field(default=None, description="Account email")
    password: str | None = Field(default=None, description="Password")


class AccountOut(BaseModel):
    """Public view of an account (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    name: str
    email: str
    role: str
    created_at: datetime | None = None


class TokenClaims(BaseModel):
    """Identity carried inside a session token and attached to gated requests."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    role: str


class MessageResponse(BaseModel):
    """Envelope shared by every JSON response."""

    success: bool = True
    message: str


class RegisterResponse(MessageResponse):
    user: AccountOut


class LoginResponse(MessageResponse):
    token: str = Field(..., description="JWT; send as 'Authorization: Bearer <token>'")
    user: AccountOut
