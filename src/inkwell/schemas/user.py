"""User-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RegisterRequest(BaseModel):
    """Schema for account registration."""

    username: str = Field(..., min_length=3, max_length=15, description="Unique username")
    password: str = Field(..., min_length=6, description="Plain text password (hashed on receipt)")

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v


class LoginRequest(BaseModel):
    """Schema for login submissions."""

    username: str = Field(..., min_length=1, description="Account username")
    password: str = Field(..., min_length=1, description="Account password")

    @field_validator("username", "password", mode="before")
    @classmethod
    def strip_fields(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v


class UserSummary(BaseModel):
    """Public view of a user account."""

    id: int
    username: str

    model_config = ConfigDict(from_attributes=True)


class RegisterResponse(BaseModel):
    """Registration response."""

    message: str
    user: UserSummary


class LoginResponse(BaseModel):
    """Response returned after successful login."""

    message: str
    token: str = Field(..., description="JWT access token")
