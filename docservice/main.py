import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from docservice.api.http.health import router as health_router
from docservice.api.http.documents import router as documents_router
from docservice.core.config import Settings, settings as default_settings
from docservice.core.db import create_engine, create_session_factory, init_models, wait_for_database
from docservice.core.logging import configure_logging
from docservice.db.repositories.document_repository import DocumentRepository
from docservice.domains.documents.services import DocumentService
from docservice.infrastructure.cache.redis_cache import RedisDocumentCache, create_redis_client

logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"
REDIS_PING_TIMEOUT = 3


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.log_level)
        logger.info(
            f"config: http={settings.http_host}:{settings.http_port} "
            f"db={settings.safe_database_url} redis={settings.redis_addr}/{settings.redis_db} "
            f"cache_ttl={settings.cache_ttl}"
        )

        engine = create_engine(settings)
        await wait_for_database(engine, settings.database_connect_timeout)
        await init_models(engine)
        logger.info(f"Database ready: {settings.safe_database_url}")

        client = create_redis_client(settings)
        await asyncio.wait_for(client.ping(), timeout=REDIS_PING_TIMEOUT)
        logger.info(f"Redis ready: {settings.redis_addr}")

        cache = RedisDocumentCache(client, settings.cache_ttl, settings.redis_prefix)
        repository = DocumentRepository(create_session_factory(engine))

        app.state.engine = engine
        app.state.document_cache = cache
        app.state.document_service = DocumentService(repository, cache)
        try:
            yield
        finally:
            await cache.close()
            await engine.dispose()
            logger.info("Connections closed")

    app = FastAPI(
        title="DocService",
        description="CRUD документов с кешированием чтения в Redis",
        version=APP_VERSION,
        lifespan=lifespan
    )

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError):
        # текст ошибки SQLAlchemy содержит SQL и параметры, наружу не отдаём
        logger.error(f"Store operation failed on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Operation failed"}
        )

    # Подключаем роутеры
    app.include_router(health_router)
    app.include_router(documents_router)

    @app.get("/")
    async def root():
        """Корневой эндпоинт"""
        return {
            "message": "DocService API",
            "version": APP_VERSION,
            "docs": "/docs",
            "health": "/health"
        }

    return app


app = create_app()


def run() -> None:
    configure_logging(default_settings.log_level)
    uvicorn.run(
        "docservice.main:app",
        host=default_settings.http_host,
        port=default_settings.http_port,
        log_config=None
    )
