"""
SQLAlchemy Base Model.

Base class for all database records with common fields.
"""

from uuid import uuid4

from sqlalchemy import String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class UUIDMixin:
    """
    Mixin that adds a UUID string primary key.

    The key is generated by the store when the row is first flushed, so a
    freshly constructed record has `id is None` until it is saved.
    """

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
