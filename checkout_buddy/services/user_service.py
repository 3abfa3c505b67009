import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from checkout_buddy.models.users import User

logger = logging.getLogger(__name__)


class UserService:
    """Service for user persistence. Each method is a single query."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_user(self, data: Dict[str, Any]) -> User:
        user = User(**data)
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise
        await self.db.refresh(user)
        logger.info(f"User created: {user.email} (ID: {user.id})")
        return user

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.db.exec(select(User).where(User.email == email.lower()))
        return result.first()

    async def find_by_id(self, user_id: str) -> Optional[User]:
        return await self.db.get(User, user_id)

    async def find_by_google_id(self, google_user_id: str) -> Optional[User]:
        result = await self.db.exec(select(User).where(User.google_user_id == google_user_id))
        return result.first()

    async def find_by_verification_code(self, code: str) -> Optional[User]:
        result = await self.db.exec(select(User).where(User.verification_code == code))
        return result.first()

    async def find_by_reset_code(self, code: str) -> Optional[User]:
        result = await self.db.exec(select(User).where(User.reset_password_code == code))
        return result.first()

    async def find_all(self) -> List[User]:
        result = await self.db.exec(select(User).order_by(User.created_at))
        return list(result.all())

    async def update_user(self, user_id: str, data: Dict[str, Any]) -> Optional[User]:
        user = await self.db.get(User, user_id)
        if user is None:
            return None
        for key, value in data.items():
            setattr(user, key, value)
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def delete_user(self, user_id: str) -> bool:
        user = await self.db.get(User, user_id)
        if user is None:
            return False
        await self.db.delete(user)
        await self.db.commit()
        logger.info(f"User deleted: {user_id}")
        return True
