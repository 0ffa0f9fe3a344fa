"""
Database Module Initialization
"""

from haste.db.session import create_engine
from haste.db.models import Base, DocumentEntry

__all__ = [
    "create_engine",
    "Base",
    "DocumentEntry",
]
