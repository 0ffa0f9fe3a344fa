"""
Service Layer Module Initialization
"""

from haste.services.document_service import DocumentService

__all__ = [
    "DocumentService",
]
