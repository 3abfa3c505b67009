import logging

from fastapi.responses import JSONResponse

from checkout_buddy.core.exceptions import (
    ForbiddenError,
    NotFoundError,
    ValidationError,
    error_boundary,
)
from checkout_buddy.core.responses import respond
from checkout_buddy.schemas.users import Principal, UserPublic, UserUpdate
from checkout_buddy.services.user_service import UserService

logger = logging.getLogger(__name__)


class UserController:

    def __init__(self, user_service: UserService):
        self.user_service = user_service

    @staticmethod
    def _ensure_self_or_admin(principal: Principal, user_id: str) -> None:
        if principal.id != user_id and not principal.is_admin:
            raise ForbiddenError("You can only modify your own account")

    @error_boundary()
    async def get_all_users(self, principal: Principal) -> JSONResponse:
        if principal.is_guest:
            return respond("Request was successful", [])

        users = await self.user_service.find_all()
        return respond("Request was successful", [UserPublic.model_validate(user) for user in users])

    @error_boundary()
    async def get_user(self, principal: Principal, user_id: str) -> JSONResponse:
        if principal.is_guest:
            return respond("Request was successful", {})

        user = await self.user_service.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")

        return respond("Request was successful", {"user": UserPublic.model_validate(user)})

    @error_boundary()
    async def update_user(self, principal: Principal, user_id: str, data: UserUpdate) -> JSONResponse:
        if principal.is_guest:
            return respond("Request was successful", {})
        self._ensure_self_or_admin(principal, user_id)

        user = await self.user_service.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")

        changes = {key: value for key, value in data.model_dump().items() if value not in (None, "")}
        if "email" in changes:
            changes["email"] = changes["email"].lower()
            if changes["email"] != user.email:
                if await self.user_service.find_by_email(changes["email"]):
                    raise ValidationError("Email already exist")

        user = await self.user_service.update_user(user_id, changes)
        logger.info(f"User updated: {user_id} ({', '.join(changes) or 'no changes'})")

        return respond("User updated successfully", {"user": UserPublic.model_validate(user)})

    @error_boundary()
    async def delete_user(self, principal: Principal, user_id: str) -> JSONResponse:
        if principal.is_guest:
            raise ForbiddenError()
        self._ensure_self_or_admin(principal, user_id)

        if not await self.user_service.delete_user(user_id):
            raise NotFoundError("User not found")

        return respond("User deleted successfully")
