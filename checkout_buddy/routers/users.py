from fastapi import APIRouter, Depends

from checkout_buddy.controllers.user_controller import UserController
from checkout_buddy.dependencies import CurrentPrincipal, get_user_controller
from checkout_buddy.schemas import UserUpdate

router = APIRouter()


@router.get("")
async def list_users(
    principal: CurrentPrincipal,
    controller: UserController = Depends(get_user_controller),
):
    return await controller.get_all_users(principal)


@router.get("/{user_id}")
async def get_user(
    user_id: str,
    principal: CurrentPrincipal,
    controller: UserController = Depends(get_user_controller),
):
    return await controller.get_user(principal, user_id)


@router.patch("/{user_id}")
async def update_user(
    user_id: str,
    data: UserUpdate,
    principal: CurrentPrincipal,
    controller: UserController = Depends(get_user_controller),
):
    return await controller.update_user(principal, user_id, data)


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    principal: CurrentPrincipal,
    controller: UserController = Depends(get_user_controller),
):
    return await controller.delete_user(principal, user_id)
