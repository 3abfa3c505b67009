"""
Pydantic schemas for orders.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .common import CamelModel


class OrderItemIn(CamelModel):
    name: str
    image: str
    price: str
    barcode: str
    quantity: int = Field(..., ge=1)


class OrderCreate(CamelModel):
    items: List[OrderItemIn]
    total_amount: float
    currency: str = Field(..., min_length=1)
    payment_intent_id: str = Field(..., min_length=1)
    payment_method: Optional[str] = None
    payment_status: Optional[str] = None


class OrderItemPublic(CamelModel):
    id: str
    name: str
    barcode: str
    image: str
    quantity: int
    price: str


class OrderPublic(CamelModel):
    """Public projection of an order and its items."""
    id: str
    user_id: str
    items: List[OrderItemPublic]
    total_amount: float
    currency: str
    payment_intent_id: str
    payment_method: str
    payment_status: str
    created_at: datetime
    updated_at: datetime
