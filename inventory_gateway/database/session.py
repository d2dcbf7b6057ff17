"""
Database Session Management
============================

Handles the async engine and session lifecycle.
"""

import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from inventory_gateway.config import settings
from inventory_gateway.models import base


def create_db_engine(database_url: Optional[str] = None) -> AsyncEngine:
    """Create and configure the async database engine."""
    database_url = database_url or settings.database_url

    engine_instance = create_async_engine(database_url, echo=settings.app_debug)

    if database_url.startswith("sqlite"):
        # SQLite: ensure the data directory exists
        if ":///" in database_url:
            db_path = database_url.split(":///")[1]
            if db_path and not db_path.startswith(":memory:"):
                db_dir = os.path.dirname(db_path)
                if db_dir and not os.path.exists(db_dir):
                    os.makedirs(db_dir, exist_ok=True)

        # Built-in lower() only folds ASCII; name search relies on lower()
        @event.listens_for(engine_instance.sync_engine, "connect")
        def set_sqlite_functions(dbapi_conn, connection_record):
            dbapi_conn.create_function("lower", 1, _unicode_lower, deterministic=True)

    return engine_instance


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def create_session_factory(engine_instance: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to an engine; sessions keep rows readable after commit."""
    return async_sessionmaker(
        bind=engine_instance,
        autoflush=False,
        expire_on_commit=False,
    )


# Create global engine and session factory
engine = create_db_engine()
SessionLocal = create_session_factory(engine)


@asynccontextmanager
async def get_db_context(
    session_factory: Optional[async_sessionmaker[AsyncSession]] = None
) -> AsyncIterator[AsyncSession]:
    """
    Async context manager for database sessions.

    Commits when the block exits cleanly, rolls back and re-raises otherwise.

    Usage:
        async with get_db_context() as db:
            db.add(product)
    """
    factory = session_factory or SessionLocal
    async with factory() as db:
        try:
            yield db
            await db.commit()
        except Exception:
            await db.rollback()
            raise


async def create_all_tables(engine_instance: Optional[AsyncEngine] = None) -> None:
    """Create all tables in the database."""
    await base.create_all_tables(engine_instance or engine)


async def drop_all_tables(engine_instance: Optional[AsyncEngine] = None) -> None:
    """Drop all tables in the database."""
    await base.drop_all_tables(engine_instance or engine)
