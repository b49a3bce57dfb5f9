# academic_records/core/database.py
"""Database connections and session management for the three logical stores.

users     - accounts and roles
academic  - careers, specialities, cycles and subjects
profiles  - student/teacher profiles, enrollments and the reference rows
            copied from the other two stores
"""
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy import text
import logging

from .config import settings

logger = logging.getLogger(__name__)


def make_engine(url: str, application_name: str) -> AsyncEngine:
    """Create an async engine, adding pool and server settings only for asyncpg."""
    kwargs = {
        "pool_pre_ping": True,
        "echo": (settings.environment == 'development'),
    }
    if url.startswith("postgresql+asyncpg"):
        kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_recycle=settings.db_pool_recycle,
            connect_args={
                "command_timeout": 60,
                "server_settings": {
                    "jit": "off",
                    "application_name": application_name,
                    "statement_timeout": "60s",
                    "idle_in_transaction_session_timeout": "60s",  # Prevent hanging transactions
                    "lock_timeout": "30s",
                }
            },
        )
    return create_async_engine(url, **kwargs)


def make_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        engine,
        expire_on_commit=False,
        class_=AsyncSession,
        autoflush=False,  # Manual control over flushing
    )


users_engine = make_engine(settings.users_database_url, "academic_records_users")
profiles_engine = make_engine(settings.profiles_database_url, "academic_records_profiles")
academic_engine = make_engine(settings.academic_database_url, "academic_records_academic")

UsersSessionLocal = make_session_factory(users_engine)
ProfilesSessionLocal = make_session_factory(profiles_engine)
AcademicSessionLocal = make_session_factory(academic_engine)

ENGINES = {
    "users": users_engine,
    "profiles": profiles_engine,
    "academic": academic_engine,
}


async def get_users_db() -> AsyncGenerator[AsyncSession, None]:
    """Session on the users database for one request"""
    async with UsersSessionLocal() as session:
        try:
            yield session
        except Exception as e:
            logger.error(f"Users database session error: {e}")
            await session.rollback()
            raise


async def get_profiles_db() -> AsyncGenerator[AsyncSession, None]:
    """Session on the profiles database for one request"""
    async with ProfilesSessionLocal() as session:
        try:
            yield session
        except Exception as e:
            logger.error(f"Profiles database session error: {e}")
            await session.rollback()
            raise


async def get_academic_db() -> AsyncGenerator[AsyncSession, None]:
    """Session on the academic database for one request"""
    async with AcademicSessionLocal() as session:
        try:
            yield session
        except Exception as e:
            logger.error(f"Academic database session error: {e}")
            await session.rollback()
            raise


async def health_check_db(engines: dict = None) -> dict:
    """Probe every database with SELECT 1, returning name -> healthy"""
    status = {}
    for name, engine in (engines or ENGINES).items():
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            status[name] = True
        except Exception as e:
            logger.error(f"Database health check failed for {name}: {e}")
            status[name] = False
    return status


async def close_db_connections():
    """Properly close all database connections"""
    for engine in ENGINES.values():
        await engine.dispose()
    logger.info("Database connections closed")
