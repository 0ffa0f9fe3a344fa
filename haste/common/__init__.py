"""
Common Utilities Module Initialization
"""

from haste.common.errors import (
    AppError,
    DocumentNotFoundError,
    DocumentTooLargeError,
    InvalidDocumentError,
    StorageError,
)

__all__ = [
    "AppError",
    "DocumentNotFoundError",
    "DocumentTooLargeError",
    "InvalidDocumentError",
    "StorageError",
]
