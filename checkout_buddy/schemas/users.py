"""
Pydantic schemas for users and the authenticated principal.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from .common import CamelModel

GUEST_ROLE = "guest"
ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class Principal:
    """Identity resolved from the bearer token for one request."""
    id: str
    email: str
    role: str

    @property
    def is_guest(self) -> bool:
        return self.role == GUEST_ROLE

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE

    @classmethod
    def guest(cls) -> "Principal":
        return cls(id="", email="", role=GUEST_ROLE)


class UserPublic(CamelModel):
    """Public projection of a user; secrets and internal fields never appear."""
    id: str
    name: str
    email: str
    image: str = ""
    location: Optional[str] = None
    phone_no: Optional[str] = None
    verified: bool = False
    created_at: datetime
    updated_at: datetime

    @field_validator("image", mode="before")
    @classmethod
    def default_image(cls, value: Optional[str]) -> str:
        return value or ""


class UserUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=2)
    email: Optional[EmailStr] = None
    phone_no: Optional[str] = None
    location: Optional[str] = None
