"""
SQLModel database model for application users.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from .base import BaseModel, new_id


class User(BaseModel, table=True):
    """Registered account. ``password`` is empty for Google-only sign-ins."""
    __tablename__ = "users"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)  # stored lower-cased
    password: Optional[str] = Field(default=None, max_length=255)  # bcrypt hash
    role: str = Field(default="user", max_length=50)
    image: Optional[str] = Field(default=None, max_length=1000)
    location: Optional[str] = Field(default=None, max_length=255)
    phone_no: Optional[str] = Field(default=None, max_length=50)
    google_user_id: Optional[str] = Field(default=None, unique=True, index=True, max_length=255)
    refresh_token: str = Field(max_length=1000)
    verified: bool = Field(default=False)
    verification_code: Optional[str] = Field(default=None, unique=True, max_length=4)
    verification_code_expires: Optional[datetime] = Field(default=None, sa_type=DateTime())
    reset_password_code: Optional[str] = Field(default=None, index=True, max_length=4)
    reset_password_code_expires: Optional[datetime] = Field(default=None, sa_type=DateTime())

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}' name='{self.name}')>"
