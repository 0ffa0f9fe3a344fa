"""
API Router Module Initialization
"""

from haste.api.documents import router as documents_router

__all__ = [
    "documents_router",
]
