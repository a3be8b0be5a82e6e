from typing import Optional
import os

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    async_sessionmaker,
    create_async_engine,
)

from execution_hooks.config.settings import settings
from execution_hooks.core.logger import LoggerManager

logger = LoggerManager.get_instance().system

DRIVER_HINT = "Install with: pip install asyncpg"

# Engine state, created lazily on first use
_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker] = None
_engine_unavailable = False


def build_engine(database_uri: Optional[str] = None) -> Optional[AsyncEngine]:
    """
    Create the async engine with a bounded connection pool.

    Args:
        database_uri: Overrides the configured DATABASE_URI.

    Returns:
        The engine, or None when the driver is missing or the URL is unusable.
    """
    uri = database_uri or str(settings.DATABASE_URI)
    engine_opts = {
        "echo": False,
        "future": True,
        "pool_pre_ping": True,
    }
    if not uri.startswith("sqlite"):
        engine_opts.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=0,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
        )

    try:
        return create_async_engine(uri, **engine_opts)
    except ImportError as e:
        logger.error(f"[HOOK] Database driver not found ({e}) - database logging disabled. {DRIVER_HINT}")
        return None
    except Exception as e:
        logger.error(f"[HOOK] Could not create database engine ({e}) - database logging disabled")
        return None


def configure_database(database_uri: Optional[str] = None) -> Optional[AsyncEngine]:
    """
    (Re)build the engine and session factory.

    Args:
        database_uri: Overrides the configured DATABASE_URI.

    Returns:
        The engine, or None when logging is disabled.
    """
    global _engine, _session_factory, _engine_unavailable

    _engine = build_engine(database_uri)
    _engine_unavailable = _engine is None
    _session_factory = None
    if _engine is not None:
        _session_factory = async_sessionmaker(
            _engine,
            expire_on_commit=False,
            autoflush=False,
        )
    return _engine


def get_engine() -> Optional[AsyncEngine]:
    """Return the shared engine, building it on first call."""
    if _engine is None and not _engine_unavailable:
        configure_database()
    return _engine


def get_session_factory() -> Optional[async_sessionmaker]:
    """Return the session factory, or None when logging is disabled."""
    get_engine()
    return _session_factory


def is_available() -> bool:
    """Whether database logging is enabled."""
    return get_engine() is not None


async def dispose_engine() -> None:
    """Close all pooled connections and forget the engine."""
    global _engine, _session_factory, _engine_unavailable

    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
    _engine_unavailable = False


async def check_connection():
    """
    Ask the database for its current time.

    Returns:
        The value of NOW() (CURRENT_TIMESTAMP on SQLite).

    Raises:
        RuntimeError: If database logging is disabled.
    """
    engine = get_engine()
    if engine is None:
        raise RuntimeError("Database logging is disabled")

    query = "SELECT CURRENT_TIMESTAMP" if engine.dialect.name == "sqlite" else "SELECT NOW()"
    async with engine.connect() as conn:
        result = await conn.execute(text(query))
        return result.scalar_one()


async def init_db() -> None:
    """Create the execution log table if it doesn't exist."""
    engine = get_engine()
    if engine is None:
        raise RuntimeError("Database logging is disabled")

    # Import all models to ensure they're registered
    import execution_hooks.db.all_models  # noqa: F401
    from execution_hooks.db.base import Base

    if engine.dialect.name == "sqlite" and engine.url.database not in (None, "", ":memory:"):
        db_dir = os.path.dirname(os.path.abspath(engine.url.database))
        if db_dir and not os.path.exists(db_dir):
            logger.info(f"Creating database directory: {db_dir}")
            os.makedirs(db_dir, exist_ok=True)

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables initialized successfully")
    except Exception as e:
        logger.error(f"Error initializing database: {str(e)}", exc_info=True)
        raise
