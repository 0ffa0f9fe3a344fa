"""
Domain Model Module Initialization
"""

from haste.domain.document import Document, DocumentCreateResponse, MessageResponse

__all__ = [
    "Document",
    "DocumentCreateResponse",
    "MessageResponse",
]
