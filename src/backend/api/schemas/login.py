"""
Authentication schemas for username/password login.
"""

from core.schema_base import HTTPSchemaModel
from pydantic import Field

from api.schemas.user import UserRead


class LoginRequest(HTTPSchemaModel):
    """Schema for login request.

    Only string type is enforced here; empty values simply fail to match.
    """

    username: str = Field(..., max_length=50)
    password: str = Field(...)


class TokenResponse(HTTPSchemaModel):
    """Schema for token response."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token expiration time in seconds")


class LoginResponse(TokenResponse):
    """Schema for login response with the authenticated user."""

    user: UserRead = Field(..., description="User information")
