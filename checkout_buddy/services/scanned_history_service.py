from typing import Any, Dict, List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from checkout_buddy.models.scanned import ScannedHistory


class ScannedHistoryService:
    """Service for scan history persistence."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def save(self, data: Dict[str, Any]) -> ScannedHistory:
        scanned = ScannedHistory(**data)
        self.db.add(scanned)
        await self.db.commit()
        await self.db.refresh(scanned)
        return scanned

    async def find_by_user_id(self, user_id: str) -> List[ScannedHistory]:
        # newest first
        result = await self.db.exec(
            select(ScannedHistory)
            .where(ScannedHistory.user_id == user_id)
            .order_by(ScannedHistory.created_at.desc())
        )
        return list(result.all())

    async def find_by_barcode(self, barcode: str) -> List[ScannedHistory]:
        result = await self.db.exec(select(ScannedHistory).where(ScannedHistory.barcode == barcode))
        return list(result.all())

    async def find_by_id(self, scanned_id: str) -> Optional[ScannedHistory]:
        return await self.db.get(ScannedHistory, scanned_id)

    async def delete_by_id(self, scanned_id: str) -> bool:
        scanned = await self.db.get(ScannedHistory, scanned_id)
        if scanned is None:
            return False
        await self.db.delete(scanned)
        await self.db.commit()
        return True
