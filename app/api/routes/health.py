"""
Health check routes.
"""
from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import text
import redis.asyncio as redis

from app.core.database import get_db
from app.core.config import settings
from app.core.logging import get_logger
from app.schemas.base import BaseSchema

logger = get_logger(__name__)

router = APIRouter(tags=["health"])

HEALTHY = "healthy"


class HealthResponse(BaseSchema):
    """Health check response."""

    status: str
    timestamp: str
    checks: Dict[str, str]


async def _check_database(db: AsyncSession) -> str:
    try:
        await db.execute(text("SELECT 1"))
        return HEALTHY
    except Exception as e:
        logger.warning("health_check_failed", dependency="database", error=str(e))
        return f"unhealthy: {e}"


async def _check_redis() -> str:
    client = redis.from_url(settings.redis_url)
    try:
        await client.ping()
        return HEALTHY
    except Exception as e:
        logger.warning("health_check_failed", dependency="redis", error=str(e))
        return f"unhealthy: {e}"
    finally:
        await client.aclose()


@router.get("/health", response_model=HealthResponse)
async def health_check(db: AsyncSession = Depends(get_db)):
    """
    Database and Redis (rate limiter backend) reachability.

    Always 200; `status` is "degraded" when any check fails.
    """
    checks = {
        "database": await _check_database(db),
        "redis": await _check_redis(),
    }
    all_healthy = all(v == HEALTHY for v in checks.values())

    return HealthResponse(
        status=HEALTHY if all_healthy else "degraded",
        timestamp=datetime.now(timezone.utc).isoformat(),
        checks=checks,
    )
