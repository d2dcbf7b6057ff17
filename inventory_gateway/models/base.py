"""
Base Model
==========

Provides common functionality for all database models.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


def uuid_primary_key(name: str) -> Mapped[uuid.UUID]:
    """Generated UUID primary key stored under `name` (e.g. "product_id")."""
    return mapped_column(
        name,
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Generated unique identifier"
    )


class CreatedAtMixin:
    """Mixin that adds a created_at audit timestamp."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=True
    )


class TimestampMixin(CreatedAtMixin):
    """Mixin that adds created_at and updated_at timestamps."""

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=True
    )


async def create_all_tables(engine) -> None:
    """Create all tables on an async engine."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_all_tables(engine) -> None:
    """Drop all tables on an async engine."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
