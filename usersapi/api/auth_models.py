"""Request/response models for authentication endpoints."""

from pydantic import BaseModel, Field

from usersapi.auth.jwt import BEARER


class LoginInput(BaseModel):
    """Login / register request body."""
    email: str = Field(..., description="Login identity")
    password: str = Field(..., description="Password (not checked by the placeholder login)")


class AuthBody(BaseModel):
    """Response model for a successful login."""
    access_token: str
    token_type: str = BEARER
