# src/clinicsync/db/database.py
import uuid
from typing import Any, Dict
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base
from clinicsync.core.config import settings
from clinicsync.utils.logger import setup_logger

logger = setup_logger("DATABASE")

# Base class for models
Base = declarative_base()


def generate_id() -> str:
    return str(uuid.uuid4())


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine; pool tuning only applies to server databases"""
    options: Dict[str, Any] = {"echo": echo, "future": True}

    if "postgresql" in database_url:
        options.update(
            pool_size=20,
            max_overflow=10,
            pool_timeout=30,
            pool_recycle=3600,
            pool_pre_ping=True,
            connect_args={
                "server_settings": {
                    "jit": "off",
                    "application_name": "clinicsync",
                },
            },
        )

    return create_async_engine(database_url, **options)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        bind=bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# Create SQLAlchemy engine with async support
engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

# Async session factory
AsyncSessionLocal = build_session_factory(engine)


async def create_tables(bind: AsyncEngine = engine):
    """Create every entity table"""
    # Register all models on Base.metadata
    import clinicsync.models  # noqa: F401

    try:
        async with bind.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created successfully")
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise


async def check_db_connection(bind: AsyncEngine = engine) -> bool:
    """Check database connection health"""
    try:
        async with bind.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database connection check failed: {e}")
        return False


async def disconnect_db(bind: AsyncEngine = engine):
    """Disconnect from database"""
    await bind.dispose()
