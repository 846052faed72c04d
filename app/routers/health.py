import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.cache import CacheBackend
from app.database import get_db, ping
from app.dependencies import get_cache
from app.schemas import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse, responses={503: {"model": HealthResponse}})
async def health(
    db: AsyncSession = Depends(get_db),
    cache: CacheBackend = Depends(get_cache),
):
    """Report database connectivity; the cache is informational only."""
    try:
        await ping(db)
    except Exception as exc:
        logger.error("Health check: database unreachable: %s", exc)
        body = HealthResponse(status="unhealthy", database="unavailable", cache=cache.stats)
        return JSONResponse(status_code=503, content=body.model_dump())
    return HealthResponse(status="healthy", database="ok", cache=cache.stats)
