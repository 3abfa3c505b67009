"""
Pydantic schemas for emailed receipts.
"""
from typing import List, Optional

from .common import CamelModel

RECEIPT_FIELDS = ("product_name", "subtotal", "tax", "total", "payment_method", "date")


class ReceiptRequest(CamelModel):
    """Receipt line fields. All are required; presence is checked by the controller
    so guests get their 403 before any field validation happens."""
    product_name: Optional[str] = None
    subtotal: Optional[float] = None
    tax: Optional[float] = None
    total: Optional[float] = None
    payment_method: Optional[str] = None
    date: Optional[str] = None

    def missing_fields(self) -> List[str]:
        return [name for name in RECEIPT_FIELDS if getattr(self, name) in (None, "")]


class ReceiptDetails(CamelModel):
    email: str
    name: str
    product_name: str
    subtotal: float
    tax: float
    total: float
    payment_method: str
    date: str
