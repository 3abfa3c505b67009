"""
Pydantic schemas for payment intents.
"""
from pydantic import Field

from .common import CamelModel


class PaymentIntentCreate(CamelModel):
    amount: float = Field(..., ge=1)  # smallest currency unit, truncated to int
    currency: str = Field(..., min_length=3, max_length=3)
