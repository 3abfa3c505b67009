import logging
from typing import Any, Dict, List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from checkout_buddy.models.orders import Order, OrderItem

logger = logging.getLogger(__name__)


class OrderService:
    """Service for order persistence."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_order(self, data: Dict[str, Any], items: List[Dict[str, Any]]) -> Order:
        order = Order(**data)
        order.items = [OrderItem(position=index, **item) for index, item in enumerate(items)]
        self.db.add(order)
        await self.db.commit()
        logger.info(f"Order created: {order.id} for user {order.user_id} ({len(items)} items)")
        return await self.get_order_by_id(order.id)

    async def get_all_orders(self, user_id: str) -> List[Order]:
        result = await self.db.exec(
            select(Order).where(Order.user_id == user_id).order_by(Order.created_at.desc())
        )
        return list(result.all())

    async def get_order_by_id(self, order_id: str) -> Optional[Order]:
        result = await self.db.exec(select(Order).where(Order.id == order_id))
        return result.first()

    async def update_order_status(self, order_id: str, payment_status: str) -> Optional[Order]:
        order = await self.get_order_by_id(order_id)
        if order is None:
            return None
        order.payment_status = payment_status
        self.db.add(order)
        await self.db.commit()
        await self.db.refresh(order)
        return order

    async def delete_order(self, order_id: str) -> bool:
        order = await self.get_order_by_id(order_id)
        if order is None:
            return False
        await self.db.delete(order)
        await self.db.commit()
        logger.info(f"Order deleted: {order_id}")
        return True
