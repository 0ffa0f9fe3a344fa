"""
SQLAlchemy ORM Model Definitions

Defines the table used by the database document store:
- entries: Documents keyed by their generated key
"""

from typing import Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """SQLAlchemy ORM Base Class"""
    pass


class DocumentEntry(Base):
    """
    Documents Table

    One row per stored document. The unique constraint on `key` rejects a
    second insert for a key already taken.
    """
    __tablename__ = "entries"

    # Primary Key ID
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Document key, unique
    key: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    # Document content
    value: Mapped[str] = mapped_column(Text, nullable=False)
    # Expiration as UNIX seconds, NULL means never expires
    expiration: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
