import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from docservice.core.db import ping_database

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(request: Request):
    """Проверка доступности базы и кеша"""
    try:
        await ping_database(request.app.state.engine)
        database_ok = True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        database_ok = False

    cache_ok = await request.app.state.document_cache.ping()

    if not database_ok:
        code = status.HTTP_503_SERVICE_UNAVAILABLE
        state = "unavailable"
    elif not cache_ok:
        code = status.HTTP_200_OK
        state = "degraded"
    else:
        code = status.HTTP_200_OK
        state = "ok"

    return JSONResponse(
        status_code=code,
        content={"status": state, "database": database_ok, "cache": cache_ok}
    )
