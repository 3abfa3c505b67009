import logging

from fastapi import status
from fastapi.responses import JSONResponse

from checkout_buddy.core.exceptions import ForbiddenError, NotFoundError, error_boundary
from checkout_buddy.core.responses import respond
from checkout_buddy.models.orders import Order
from checkout_buddy.schemas.orders import OrderCreate, OrderPublic
from checkout_buddy.schemas.users import Principal
from checkout_buddy.services.order_service import OrderService

logger = logging.getLogger(__name__)


class OrderController:
    """Orders are always scoped to the calling user."""

    def __init__(self, order_service: OrderService):
        self.order_service = order_service

    async def _owned_order(self, principal: Principal, order_id: str) -> Order:
        order = await self.order_service.get_order_by_id(order_id)
        # Someone else's order looks exactly like a missing one
        if order is None or order.user_id != principal.id:
            raise NotFoundError("Order not found")
        return order

    @error_boundary()
    async def create_order(self, principal: Principal, data: OrderCreate) -> JSONResponse:
        if principal.is_guest:
            return respond("Request was successful", {})

        order = await self.order_service.create_order(
            {
                "user_id": principal.id,
                "total_amount": data.total_amount,
                "currency": data.currency,
                "payment_intent_id": data.payment_intent_id,
                "payment_method": data.payment_method or "card",
                "payment_status": data.payment_status or "pending",
            },
            [item.model_dump() for item in data.items],
        )

        return respond("Order created successfully", OrderPublic.model_validate(order), status.HTTP_201_CREATED)

    @error_boundary()
    async def get_all_orders(self, principal: Principal) -> JSONResponse:
        if principal.is_guest:
            return respond("Request was successful", [])

        orders = await self.order_service.get_all_orders(principal.id)
        return respond("Request was successful", [OrderPublic.model_validate(order) for order in orders])

    @error_boundary()
    async def get_order(self, principal: Principal, order_id: str) -> JSONResponse:
        if principal.is_guest:
            return respond("Request was successful", {})

        order = await self._owned_order(principal, order_id)
        return respond("Request was successful", OrderPublic.model_validate(order))

    @error_boundary()
    async def delete_order(self, principal: Principal, order_id: str) -> JSONResponse:
        if principal.is_guest:
            raise ForbiddenError()

        order = await self._owned_order(principal, order_id)
        await self.order_service.delete_order(order.id)
        return respond("Order deleted successfully")
