"""
Product API — Database Session Management
===========================================

What:  Async SQLAlchemy engine, session factory, schema bootstrap, and the
       FastAPI session dependency.
How:   Creates an async engine with connection pooling at import time (no
       connection is opened until first use). Sessions are created per
       request; the data mapper commits its own writes.
Who:   Used by route handlers via FastAPI's dependency injection system and
       by the application lifespan.

Connection Pooling:
    pool_size / max_overflow come from settings (PostgreSQL only).
    pool_pre_ping validates connections before use.
    pool_recycle=3600 recycles connections every hour.
"""

import logging
from typing import Any, AsyncGenerator, Dict, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from product_api.config import settings

logger = logging.getLogger(__name__)


def _engine_options() -> Dict[str, Any]:
    """Engine keyword arguments for the configured backend."""
    options: Dict[str, Any] = {
        "pool_pre_ping": settings.db_pool_pre_ping,
        "connect_args": settings.connect_args,
        # SQL echo only in DEBUG mode
        "echo": settings.log_level == "DEBUG",
    }
    if settings.sqlalchemy_url.get_backend_name() != "sqlite":
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_recycle=3600,
        )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.sqlalchemy_url, **_engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay loaded after commit, so handlers
# can serialize a product once the mapper has committed it
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class to register with the shared
    metadata that `init_store` uses to create the schema.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the handler (the data mapper commits its own writes)
        3. On error: rolls back anything still pending
        4. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/products")
        async def list_products(db: AsyncSession = Depends(get_db_session)):
            result = await db.execute(select(Product))
            return result.scalars().all()
    """
    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def init_store(bind: Optional[AsyncEngine] = None) -> None:
    """
    Connect to the store and create the products table if it is absent.

    What:  Opens a connection and runs `create_all`, which only emits
           CREATE TABLE for tables that do not exist yet (idempotent).
    When:  Called once during application startup (lifespan).
    Raises:
        Any connection or DDL error. Startup treats it as fatal.
    """
    # Register models on Base.metadata before creating the schema
    from product_api.models.product import Product  # noqa: F401

    target = bind or engine
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Store ready: %s", target.url.render_as_string(hide_password=True))


async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
