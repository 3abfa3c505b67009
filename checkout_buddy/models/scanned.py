"""
SQLModel database model for barcode scan history.
"""
from typing import List, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field

from .base import BaseModel, new_id


class ScannedHistory(BaseModel, table=True):
    """A persisted barcode lookup. Guest scans never reach this table."""
    __tablename__ = "scanned_history"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    user_id: str = Field(index=True, max_length=36)
    barcode: str = Field(index=True, max_length=100)
    name: str = Field(max_length=500)
    price: str = Field(max_length=50)
    category: str = Field(max_length=1000)
    image_url: str = Field(max_length=1000)
    weight: Optional[str] = Field(default=None, max_length=100)
    width: Optional[str] = Field(default=None, max_length=100)
    height: Optional[str] = Field(default=None, max_length=100)
    depth: Optional[str] = Field(default=None, max_length=100)
    color: Optional[str] = Field(default=None, max_length=100)
    volume: Optional[str] = Field(default=None, max_length=100)
    images_url: Optional[List[str]] = Field(default=None, sa_column=Column(JSON))

    def __repr__(self):
        return f"<ScannedHistory(id={self.id}, barcode='{self.barcode}', user_id='{self.user_id}')>"
