from fastapi import APIRouter, Depends

from checkout_buddy.controllers.order_controller import OrderController
from checkout_buddy.dependencies import CurrentPrincipal, get_order_controller
from checkout_buddy.schemas import OrderCreate

router = APIRouter()


@router.post("")
async def create_order(
    data: OrderCreate,
    principal: CurrentPrincipal,
    controller: OrderController = Depends(get_order_controller),
):
    return await controller.create_order(principal, data)


@router.get("")
async def list_orders(
    principal: CurrentPrincipal,
    controller: OrderController = Depends(get_order_controller),
):
    return await controller.get_all_orders(principal)


@router.get("/{order_id}")
async def get_order(
    order_id: str,
    principal: CurrentPrincipal,
    controller: OrderController = Depends(get_order_controller),
):
    return await controller.get_order(principal, order_id)


@router.delete("/{order_id}")
async def delete_order(
    order_id: str,
    principal: CurrentPrincipal,
    controller: OrderController = Depends(get_order_controller),
):
    return await controller.delete_order(principal, order_id)
