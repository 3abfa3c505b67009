"""
Pydantic schemas for barcode scans and nearby stores.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .common import CamelModel


class ScanRequest(CamelModel):
    barcode: str = Field(..., min_length=1)


class ScannedPublic(CamelModel):
    """Public projection of a scan; ``id``/``user_id`` are empty when not persisted."""
    id: str = ""
    user_id: str = ""
    barcode: str
    name: str
    price: Optional[str] = None
    category: str
    image_url: Optional[str] = None
    weight: Optional[str] = None
    width: Optional[str] = None
    height: Optional[str] = None
    depth: Optional[str] = None
    color: Optional[str] = None
    volume: Optional[str] = None
    images_url: Optional[List[str]] = None
    created_at: datetime
    updated_at: datetime


class ProductSearchResult(CamelModel):
    asin: Optional[str] = None
    barcode: str
    name: str
    price: Optional[str] = None
    category: str
    image_url: Optional[str] = None
    scanned_id: Optional[str] = None


class NearbyStore(CamelModel):
    """A store near the caller. ``price`` is a display estimate, not sourced pricing."""
    id: str
    store_name: str
    name: str
    image_url: Optional[str] = None
    price: float
