import asyncio
import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from docservice.core.config import Settings
from docservice.db import models  # noqa: F401  регистрация таблиц в Base.metadata
from docservice.db.base import Base

logger = logging.getLogger(__name__)


def create_engine(settings: Settings) -> AsyncEngine:
    """Асинхронный движок по настройкам приложения"""
    options = {"future": True, "echo": settings.database_echo}
    if not settings.database_url.startswith("sqlite"):
        options["pool_size"] = settings.database_pool_size
        options["pool_pre_ping"] = True
    return create_async_engine(settings.database_url, **options)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def ping_database(engine: AsyncEngine) -> None:
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def wait_for_database(engine: AsyncEngine, timeout: float, interval: float = 0.3) -> None:
    """Ожидание доступности базы при старте сервиса"""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    last_error = None

    while loop.time() < deadline:
        try:
            await ping_database(engine)
            return
        except Exception as e:
            last_error = e
            logger.debug(f"Database is not ready yet: {e}")
        await asyncio.sleep(interval)

    raise TimeoutError(f"database ping timeout after {timeout}s: {last_error}")


async def init_models(engine: AsyncEngine) -> None:
    """Создание таблиц документов, если их нет"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
