"""Database configuration and connection setup"""
from typing import AsyncIterator

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from salonbook.config.settings import get_settings

settings = get_settings()


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine for the given URL.

    SQLite connections get their own BEGIN IMMEDIATE so that every transaction
    takes the write lock up front and concurrent writers queue on the busy
    timeout instead of failing with "database is locked".
    """
    url = make_url(database_url)

    if url.get_backend_name() == "sqlite":
        engine = create_async_engine(
            url,
            echo=echo,
            connect_args={"timeout": 30},
        )

        @event.listens_for(engine.sync_engine, "connect")
        def _disable_driver_begin(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None

        @event.listens_for(engine.sync_engine, "begin")
        def _begin_immediate(conn):
            conn.exec_driver_sql("BEGIN IMMEDIATE")

        return engine

    return create_async_engine(
        url,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_pre_ping=True,
        echo=echo,
    )


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=bind, autoflush=False, expire_on_commit=False)


# Create database engine with connection pooling
engine = build_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)

SessionLocal = build_sessionmaker(engine)


async def get_db() -> AsyncIterator[AsyncSession]:
    """Database dependency for FastAPI"""
    async with SessionLocal() as db:
        yield db


async def create_tables(bind: AsyncEngine = engine) -> None:
    """Create all tables that do not exist yet (dev and tests; prod uses Alembic)"""
    from salonbook.models import Base

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
