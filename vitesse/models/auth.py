"""Pydantic models for the ``/user`` endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Credentials exchanged for a token."""
    email: str
    password: str


class RegisterRequest(BaseModel):
    """Payload for creating a user account."""
    model_config = ConfigDict(populate_by_name=True)

    email: str
    password: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")


class AuthResponse(BaseModel):
    """Token returned by a successful login."""
    model_config = ConfigDict(populate_by_name=True)

    token: str
    is_admin: bool = Field(default=False, alias="isAdmin")
