"""
Pydantic schemas for user registration, login and responses.
"""

from pydantic import BaseModel, EmailStr, Field, validator


class UserCreate(BaseModel):
    """Schema for registering a new user."""

    name: str = Field(..., min_length=1, max_length=255, description="Display name")

    email: EmailStr = Field(..., description="Login email address")

    password: str = Field(..., min_length=8, max_length=72, description="Plain text password")

    @validator("name")
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()


class LoginRequest(BaseModel):
    """Login credentials."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """Public view of a user; the stored password never leaves the API."""

    id: int
    name: str
    email: str


class AuthResponse(BaseModel):
    """User plus bearer token, returned by registration and login."""

    user: UserResponse
    access_token: str
    token_type: str = "bearer"
    expires_in: int
