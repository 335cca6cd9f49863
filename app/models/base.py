"""
Base configurations and mixins for database models.

Provides the declarative base shared by every table plus the primary key and
timestamp mixins, so users, preferences and saved images behave the same way
on SQLite and PostgreSQL.
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, inspect
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql.functions import now as db_now


class CustomBase:
    """
    Custom base class for SQLAlchemy models with enhanced serialization.

    ``to_dict`` converts column values to JSON friendly types, rendering
    datetimes with ``isoformat()``.
    """

    def to_dict(self) -> dict:
        d = {}
        if not self:
            return d
        for column in inspect(self).mapper.column_attrs:
            value = getattr(self, column.key)
            if isinstance(value, datetime):
                d[column.key] = value.isoformat()
            else:
                d[column.key] = value
        return d


# Create the base class for all models
Base = declarative_base(cls=CustomBase)


class CreatedAtMixin:
    """
    Adds a ``created_at`` column filled in by the database on insert.
    """

    created_at = Column(
        DateTime(timezone=True),
        server_default=db_now(),
        nullable=False,
        comment="Timestamp when the record was created",
    )


class IntegerIDMixin:
    """
    Adds an auto-incrementing integer primary key.
    """

    id = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Auto-incrementing primary key",
    )


__all__ = ["Base", "CreatedAtMixin", "IntegerIDMixin"]
