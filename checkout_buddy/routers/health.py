from fastapi import APIRouter, HTTPException, status
from sqlalchemy import text

from checkout_buddy.core.config import settings
from checkout_buddy.core.database import async_engine

router = APIRouter()


@router.get("/")
async def health_check():
    return {
        "status": "healthy",
        "service": "checkout-buddy",
        "version": settings.VERSION,
    }


@router.get("/database")
async def database_health():
    try:
        async with async_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return {
            "status": "healthy",
            "service": "database",
            "connected": True,
        }
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Database health check failed: {e}",
        )
