"""
SQLModel database models for orders and their line items.
"""
from typing import List, Optional

from sqlmodel import Field, Relationship

from .base import BaseModel, new_id


class Order(BaseModel, table=True):
    """A purchase linked to a payment intent. ``user_id`` is a weak reference."""
    __tablename__ = "orders"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    user_id: str = Field(index=True, max_length=36)
    total_amount: float
    currency: str = Field(max_length=10)
    payment_intent_id: str = Field(max_length=255)
    payment_method: str = Field(default="card", max_length=50)
    payment_status: str = Field(default="pending", max_length=50)  # 'pending', 'paid', 'failed'

    items: List["OrderItem"] = Relationship(
        back_populates="order",
        sa_relationship_kwargs={
            "lazy": "selectin",
            "cascade": "all, delete-orphan",
            "order_by": "OrderItem.position",
        },
    )

    def __repr__(self):
        return f"<Order(id={self.id}, user_id='{self.user_id}', total={self.total_amount} {self.currency})>"


class OrderItem(BaseModel, table=True):
    """Snapshot of one cart line at the time the order was placed."""
    __tablename__ = "order_items"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    order_id: str = Field(foreign_key="orders.id", index=True, ondelete="CASCADE", max_length=36)
    position: int = Field(default=0)
    name: str = Field(max_length=500)
    image: str = Field(max_length=1000)
    price: str = Field(max_length=50)
    barcode: str = Field(max_length=100)
    quantity: int

    order: Optional[Order] = Relationship(back_populates="items")
