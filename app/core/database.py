import logging
from typing import Any, AsyncGenerator

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
)
from sqlalchemy.orm import declarative_base

from app.core.config import settings

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """
    SQLite ignores FOREIGN KEY / ON DELETE CASCADE unless enabled per connection
    """
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, **overrides: Any) -> AsyncEngine:
    """
    Create the async engine for the given URL
    - MySQL: utf8mb4 connection settings, pool recycling
    - SQLite: foreign key enforcement on every new connection
    """
    backend = make_url(url).get_backend_name()
    options: dict[str, Any] = {"echo": False, "pool_pre_ping": True}

    if backend == "mysql":
        options.update(
            connect_args={
                "charset": "utf8mb4",
                "init_command": "SET NAMES utf8mb4 COLLATE utf8mb4_unicode_ci",
            },
            pool_recycle=1800,
        )
    options.update(overrides)

    engine = create_async_engine(url, **options)
    if backend == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


# async engine and session factory
async_engine = build_engine(settings.SQLALCHEMY_DATABASE_URI)
async_session_factory = async_sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# ORM base
Base = declarative_base()


async def init_db(engine: AsyncEngine = async_engine) -> None:
    """
    Create the tables registered on Base.metadata (startup helper)
    """
    # importing the models registers their tables
    from app.models import user, tweet, reply, favorite, follow  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready (%s)", engine.url.get_backend_name())


async def dispose_db(engine: AsyncEngine = async_engine) -> None:
    await engine.dispose()


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency: a fresh DB session per request
    - services commit explicitly; anything left uncommitted is rolled back on close
    """
    async with async_session_factory() as session:
        yield session
