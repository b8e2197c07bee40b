"""
Database configuration.

Manages database connection settings and engine creation.
"""
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession
from sqlalchemy.orm import sessionmaker
import logging


logger = logging.getLogger(__name__)


class DatabaseSettings(BaseSettings):
    """
    Database configuration settings.
    
    Loaded from environment variables (DB_*) or .env file.
    """
    
    model_config = SettingsConfigDict(env_file=".env", env_prefix="DB_", extra="ignore")
    
    database_url: str = "sqlite+aiosqlite:///./casedesk.db"
    
    # Connection pool settings (ignored for SQLite)
    pool_size: int = 10
    max_overflow: int = 20
    pool_timeout: int = 30
    pool_recycle: int = 3600  # 1 hour
    
    # Echo SQL (for debugging)
    echo_sql: bool = False
    
    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


# =============================================================================
# ENGINE CREATION
# =============================================================================

def create_engine(settings: Optional[DatabaseSettings] = None) -> AsyncEngine:
    """
    Create async SQLAlchemy engine.
    
    Args:
        settings: Database settings (loaded from the environment when omitted)
    
    Returns:
        Configured async engine
    """
    settings = settings or DatabaseSettings()
    logger.info(f"Creating database engine: {settings.database_url}")
    
    if settings.is_sqlite:
        return create_async_engine(settings.database_url, echo=settings.echo_sql)
    
    return create_async_engine(
        settings.database_url,
        echo=settings.echo_sql,
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
        pool_timeout=settings.pool_timeout,
        pool_recycle=settings.pool_recycle,
        pool_pre_ping=True,
    )


# Global engine instance
engine: Optional[AsyncEngine] = None


def get_engine() -> AsyncEngine:
    """
    Get or create global engine instance.
    
    Returns:
        Global async engine
    """
    global engine
    
    if engine is None:
        engine = create_engine()
    
    return engine


# =============================================================================
# SESSION FACTORY
# =============================================================================

def get_session_factory(bind: Optional[AsyncEngine] = None):
    """
    Get session factory.
    
    Args:
        bind: Engine to bind (global engine when omitted)
    
    Returns:
        Session factory for creating sessions
    """
    return sessionmaker(
        bind=bind or get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# =============================================================================
# DATABASE INITIALIZATION
# =============================================================================

async def init_database(bind: Optional[AsyncEngine] = None):
    """
    Initialize database.
    
    Creates all tables if they don't exist.
    """
    from core.infrastructure.database.models import Base
    
    logger.info("Initializing database...")
    
    async with (bind or get_engine()).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    logger.info("✅ Database initialized successfully")


async def close_database():
    """Close database connections."""
    global engine
    
    if engine:
        logger.info("Closing database connections...")
        await engine.dispose()
        engine = None
        logger.info("✅ Database connections closed")
