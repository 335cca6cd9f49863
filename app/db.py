import argparse
import asyncio

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app import models  # noqa: F401
from app.config import settings
from app.models.base import Base
from app.utils.logger import setup_logger

logger = setup_logger("db")

# --- Application DB ---
if settings.database_url.startswith("postgresql://"):
    settings.database_url = settings.database_url.replace(
        "postgresql://", "postgresql+asyncpg://", 1
    )
elif settings.database_url.startswith("sqlite:///"):
    settings.database_url = settings.database_url.replace(
        "sqlite:///", "sqlite+aiosqlite:///", 1
    )

if not settings.database_url.startswith(("postgresql+asyncpg://", "sqlite+aiosqlite://")):
    raise ValueError(f"Unsupported settings.database_url prefix: {settings.database_url}")

logger.debug(f"Application DB URL: {settings.database_url}")

if settings.is_sqlite:
    # aiosqlite connections are bound to the loop that opened them
    app_engine = create_async_engine(
        settings.database_url,
        poolclass=NullPool,
        echo=settings.database_echo,
    )

    @event.listens_for(app_engine.sync_engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

else:
    app_engine = create_async_engine(
        settings.database_url,
        pool_pre_ping=True,
        pool_size=20,
        max_overflow=30,
        pool_timeout=60,
        pool_recycle=300,
        echo=settings.database_echo,
        connect_args={"timeout": 30},
    )

AppAsyncSessionLocal = async_sessionmaker(
    autoflush=False,
    bind=app_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def init_db():
    """Create all tables that do not exist yet."""
    logger.debug(
        f"Tables registered in Base.metadata: {list(Base.metadata.tables.keys())}"
    )
    async with app_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema initialized.")


async def reset_db():
    """Drop and recreate every table. Destroys all users, preferences and images."""
    logger.warning(
        "Resetting the application database. THIS IS A DESTRUCTIVE OPERATION."
    )
    async with app_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Application database has been reset and re-initialized.")


async def close_db():
    """Closes database connections."""
    logger.info("Closing database connections.")
    await app_engine.dispose()
    logger.info("Database connections closed.")


async def check_db_connection(engine_to_check=None, db_name="Application DB") -> bool:
    """Performs a simple query to check actual DB connectivity."""
    if engine_to_check is None:
        engine_to_check = app_engine

    try:
        async with engine_to_check.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            if result.scalar_one() == 1:
                logger.debug(f"{db_name} connectivity check passed.")
                return True
            logger.error(f"{db_name} connectivity check returned an unexpected value.")
            return False
    except Exception as e:
        logger.error(f"{db_name} connectivity check failed: {e}", exc_info=True)
        return False


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Persona Morph database initialization utility"
    )
    parser.add_argument(
        "action",
        choices=["init", "reset", "check"],
        help="'init' to create missing tables, "
        "'reset' to drop and recreate all tables, "
        "'check' to verify database connectivity.",
    )
    args = parser.parse_args()

    if args.action == "init":
        asyncio.run(init_db())
    elif args.action == "reset":
        confirm = input(
            "WARNING: This will delete all users and saved images. Are you sure? (yes/no): "
        )
        if confirm.lower() == "yes":
            asyncio.run(reset_db())
        else:
            logger.info("Database reset cancelled by user.")
    elif args.action == "check":
        ok = asyncio.run(check_db_connection())
        print("Database reachable." if ok else "Database NOT reachable.")
