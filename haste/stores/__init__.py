"""
Document Store Module Initialization

Backend implementations are imported lazily by the factory so that only the
configured backend's client library is required at runtime.
"""

from haste.stores.base import DocumentStore, StoreType
from haste.stores.factory import create_document_store

__all__ = [
    "DocumentStore",
    "StoreType",
    "create_document_store",
]
