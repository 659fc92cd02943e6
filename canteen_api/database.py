"""
Canteen API — Database Session Management
==========================================

What:  Async SQLAlchemy engine/session factory builders and the FastAPI
       session dependency.
Why:   Centralizes all database connection logic in one place.
How:   `create_engine()` and `create_session_factory()` build the connection
       handle from explicit `Settings`; `create_app()` stores both on
       `app.state`. `get_db_session()` pulls the factory off the current
       request's app, so nothing here is a module-level singleton.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created once per app; sessions are created per-request.

Connection Pooling Strategy:
    PostgreSQL (asyncpg): pool_size / max_overflow / pre_ping from settings,
    pool_recycle=3600.
    SQLite (aiosqlite, tests and local dev): NullPool, and foreign keys are
    switched on for every new connection so the `menus.canteen_id` reference
    is enforced the same way PostgreSQL enforces it.
"""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from canteen_api.config import Settings

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class to register with a single shared
    metadata object (used by `init_db` for `create_all`).
    """
    pass


# ── Engine Configuration ──────────────────────────────────────────────────
def create_engine(settings: Settings) -> AsyncEngine:
    """
    Build the async engine for the given settings.

    SQLite gets NullPool (no pooling support) and a connect hook enabling
    foreign keys; every other backend gets the configured pool.
    """
    if settings.is_sqlite:
        engine = create_async_engine(
            settings.database_url,
            poolclass=NullPool,
            echo=settings.log_level == "DEBUG",
        )

        @event.listens_for(engine.sync_engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_async_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
        # SQL logging is noisy; only useful during development
        echo=settings.log_level == "DEBUG",
    )


# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: rows returned by a repository stay readable after
# the dependency commits, without a lazy reload outside the session.
def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory on `request.app.state`
        2. Yields it to the route handler (the handler issues one statement)
        3. On error: rolls back the transaction
        4. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/menus")
        async def list_menus(db: AsyncSession = Depends(get_db_session)):
            ...

    Raises:
        Any exception is re-raised after rollback so the global exception
        handlers can build the response envelope.

    Writes are committed by the service inside the request, so a failed
    commit still reaches the exception handlers; newer FastAPI releases run
    the code after `yield` only once the response has been sent.
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def init_db(engine: AsyncEngine) -> None:
    """Create all tables known to `Base.metadata` (no-op for existing ones)."""
    # Import models so they register with Base before create_all
    from canteen_api import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured: %s", ", ".join(sorted(Base.metadata.tables)))


async def check_db_connection(engine: AsyncEngine) -> None:
    """Executes SELECT 1; raises if the database can't be reached."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def dispose_engine(engine: AsyncEngine) -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
