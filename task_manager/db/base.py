"""
SQLAlchemy declarative base and metadata.
Single place for table definitions; create_all runs from the app lifespan.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass
