"""
Pydantic schemas for the authentication endpoints.
"""
from typing import Optional

from pydantic import EmailStr, Field

from .common import CamelModel
from .users import UserPublic


class RegisterRequest(CamelModel):
    """Schema for user registration request."""
    email: EmailStr
    name: str = Field(..., min_length=2)
    password: str = Field(..., min_length=6)
    confirm_password: str = Field(..., min_length=6)


class LoginRequest(CamelModel):
    """Schema for user login request."""
    email: EmailStr
    password: str = Field(..., min_length=6)


class CodeRequest(CamelModel):
    """A 4-digit verification or reset code."""
    code: str = Field(..., min_length=4, max_length=4)


class EmailRequest(CamelModel):
    email: EmailStr


class ResetPasswordRequest(CamelModel):
    new_password: str = Field(..., min_length=6)
    code: str = Field(..., min_length=4, max_length=4)


class RefreshTokenRequest(CamelModel):
    refresh_token: str


class GoogleCallbackRequest(CamelModel):
    code: str
    state: str


class AuthPayload(CamelModel):
    """User projection plus the issued credentials."""
    user: UserPublic
    token: str
    refresh_token: Optional[str] = None


class GoogleUserInfo(CamelModel):
    """Schema for Google user information."""
    google_id: str
    name: str
    email: str
    picture: str = ""
