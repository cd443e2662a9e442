"""Request/response schemas for user registration, login and the current user."""

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class RegisterRequest(BaseModel):
    """New identity. email defaults to username when omitted."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    email: str | None = Field(default=None, max_length=255, description="Email address")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class RegisterResponse(BaseModel):
    """Outcome of a registration request."""

    succeeded: bool


class TokenResponse(BaseModel):
    """JWT access token returned after successful login."""

    token: str = Field(..., description="JWT access token")


class CurrentUser(BaseModel):
    """Authenticated identity (id, email, roles) taken from a validated token."""

    model_config = ConfigDict(frozen=True)

    id: int
    email: str
    roles: list[str] = Field(default_factory=list)

    def has_role(self, name: str) -> bool:
        return name in self.roles
