"""
Database connection management
"""
from typing import Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from fitness_api.config import settings
from fitness_api.database.tables import Base
from fitness_api.utils.url_builder import build_async_url, is_sqlite_url, requires_ssl


# Global database objects
engine: Optional[AsyncEngine] = None
async_session: Optional[async_sessionmaker] = None


def _enable_sqlite_foreign_keys(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _create_engine(async_database_url: str, ssl_required: bool) -> AsyncEngine:
    if is_sqlite_url(async_database_url):
        # aiosqlite connections are tied to the event loop that opened them
        sqlite_engine = create_async_engine(async_database_url, poolclass=NullPool, echo=False)
        event.listen(sqlite_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return sqlite_engine

    connect_args = {
        "server_settings": {
            "application_name": "fitness_api",
            "tcp_keepalives_idle": "600",
            "tcp_keepalives_interval": "30",
            "tcp_keepalives_count": "3",
        },
        "command_timeout": 60,
        "timeout": 20,
    }
    if ssl_required:
        connect_args["ssl"] = True

    return create_async_engine(
        async_database_url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        pool_recycle=3600,
        pool_timeout=30,
        connect_args=connect_args,
        echo=False,
    )


def init_database(database_url: Optional[str] = None) -> bool:
    """
    Initialize database connection

    Args:
        database_url: Overrides settings.DATABASE_URL when given

    Returns:
        True if initialization successful, False otherwise
    """
    global engine, async_session

    database_url = database_url or settings.DATABASE_URL
    if not database_url:
        print("Warning: DATABASE_URL not set, database features will be unavailable")
        return False

    try:
        ssl_required = requires_ssl(database_url) or settings.DB_SSLMODE == "require"
        engine = _create_engine(build_async_url(database_url), ssl_required)
        async_session = async_sessionmaker(
            bind=engine,
            expire_on_commit=False,
            class_=AsyncSession,
        )
        print(f"Database engine initialized successfully ({engine.dialect.name})")
        return True

    except Exception as e:
        print(f"Warning: Failed to initialize database engine: {e}")
        import traceback
        traceback.print_exc()
        engine = None
        async_session = None
        return False


async def create_tables() -> None:
    """Create any missing tables for the configured engine"""
    if engine is None:
        return
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print("Database tables ensured")


async def dispose_database() -> None:
    global engine, async_session
    if engine is not None:
        await engine.dispose()
    engine = None
    async_session = None


def get_session() -> Optional[async_sessionmaker]:
    """
    Get database session maker

    Returns:
        Session maker or None if not initialized
    """
    return async_session


def is_initialized() -> bool:
    """
    Check if database is initialized

    Returns:
        True if initialized, False otherwise
    """
    return engine is not None and async_session is not None
