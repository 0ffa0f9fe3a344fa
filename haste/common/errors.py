"""
Error Definitions

Defines custom exception classes used in the application for unified error handling.
"""

from typing import Any, Optional


class AppError(Exception):
    """
    Application Base Exception

    Base class for all custom exceptions, containing error message, type, and code.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "app_error",
        code: str = "internal_error",
        details: Optional[dict[str, Any]] = None,
        status_code: int = 500,
    ):
        """
        Initialize exception

        Args:
            message: Error message
            error_type: Error type
            code: Error code
            details: Extra error details
            status_code: HTTP status code
        """
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.code = code
        self.details = details or {}
        self.status_code = status_code

    def to_dict(self, include_details: bool = False) -> dict[str, Any]:
        """
        Convert to dictionary format (for API response)

        Args:
            include_details: Add type, code and details (debug mode only)

        Returns:
            dict: Error information dictionary
        """
        result: dict[str, Any] = {"message": self.message}
        if include_details:
            result["type"] = self.error_type
            result["code"] = self.code
            if self.details:
                result["details"] = self.details
        return result


class DocumentTooLargeError(AppError):
    """
    Document Too Large Error

    Raised when submitted content exceeds the configured maximum length.
    """

    def __init__(
        self,
        message: str = "Document exceeds maximum length.",
        code: str = "document_too_large",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="validation_error",
            code=code,
            details=details,
            status_code=400,
        )


class DocumentNotFoundError(AppError):
    """
    Document Not Found Error

    Raised when a key is absent from the store or its document has expired.
    """

    def __init__(
        self,
        message: str = "Document not found.",
        code: str = "document_not_found",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="not_found_error",
            code=code,
            details=details,
            status_code=404,
        )


class StorageError(AppError):
    """
    Storage Error

    Raised when the document store reports a failed write.
    """

    def __init__(
        self,
        message: str = "Error adding document.",
        code: str = "storage_error",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="storage_error",
            code=code,
            details=details,
            status_code=500,
        )


class InvalidDocumentError(AppError):
    """
    Invalid Document Error

    Raised when a multipart request body cannot be parsed.
    """

    def __init__(
        self,
        message: str = "Invalid document body.",
        code: str = "invalid_document",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="validation_error",
            code=code,
            details=details,
            status_code=400,
        )
