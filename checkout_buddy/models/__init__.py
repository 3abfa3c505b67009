from .base import BaseModel
from .orders import Order, OrderItem
from .scanned import ScannedHistory
from .users import User

__all__ = ["BaseModel", "Order", "OrderItem", "ScannedHistory", "User"]
