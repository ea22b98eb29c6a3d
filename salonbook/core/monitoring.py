"""Health checks and monitoring endpoints"""
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from salonbook.config.database import get_db
from salonbook.config.redis import get_redis

health_router = APIRouter()


@health_router.get("")
@health_router.get("/")
async def health_check():
    """Basic health check"""
    return {"status": "healthy", "service": "salonbook-api"}


@health_router.get("/detailed")
async def detailed_health_check(db: AsyncSession = Depends(get_db)):
    """Database and broker reachability"""
    checks = {
        "api": "healthy",
        "database": "unknown",
        "redis": "unknown",
        "overall": "unknown"
    }

    try:
        await db.execute(text("SELECT 1"))
        checks["database"] = "healthy"
    except Exception as e:
        checks["database"] = f"unhealthy: {str(e)}"

    try:
        redis_client = await get_redis()
        await redis_client.ping()
        checks["redis"] = "healthy"
    except Exception as e:
        checks["redis"] = f"unhealthy: {str(e)}"

    if all(status == "healthy" for key, status in checks.items() if key != "overall"):
        checks["overall"] = "healthy"
    else:
        checks["overall"] = "degraded"

    return checks
