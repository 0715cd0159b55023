"""
Custom exceptions for the GoNext journal store.
Callers receive one of these for every failed repository operation.
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for the application."""

    # Lookup errors
    NOT_FOUND = "NOT_FOUND"

    # Input errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Storage errors
    STORAGE_ERROR = "STORAGE_ERROR"
    UNIQUE_CONSTRAINT = "UNIQUE_CONSTRAINT"
    FOREIGN_KEY_CONSTRAINT = "FOREIGN_KEY_CONSTRAINT"
    NOT_NULL_CONSTRAINT = "NOT_NULL_CONSTRAINT"
    TABLE_NOT_FOUND = "TABLE_NOT_FOUND"

    # File errors
    FILE_SYSTEM_ERROR = "FILE_SYSTEM_ERROR"
    PHOTOS_UNSUPPORTED = "PHOTOS_UNSUPPORTED"


class GoNextException(Exception):
    """Base exception for the journal store."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code.value,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(GoNextException):
    """Raised when a referenced record does not exist."""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(
            message=f"{entity} with id {entity_id} not found",
            error_code=ErrorCode.NOT_FOUND,
            details={"entity": entity, "id": entity_id},
        )
        self.entity = entity
        self.entity_id = entity_id


class ValidationFailure(GoNextException):
    """Raised when input is rejected before any write."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.VALIDATION_ERROR,
            details={"field": field} if field else None,
        )
        self.field = field


class StorageError(GoNextException):
    """Raised when the underlying store fails to read or write."""

    _CONSTRAINT_CODES = (
        ("UNIQUE constraint", ErrorCode.UNIQUE_CONSTRAINT),
        ("FOREIGN KEY constraint", ErrorCode.FOREIGN_KEY_CONSTRAINT),
        ("NOT NULL constraint", ErrorCode.NOT_NULL_CONSTRAINT),
        ("no such table", ErrorCode.TABLE_NOT_FOUND),
    )

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.STORAGE_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, error_code=error_code, details=details)

    @classmethod
    def from_db_error(cls, exc: BaseException) -> "StorageError":
        """Classify a driver/ORM error by its message."""
        text = str(exc)
        for marker, code in cls._CONSTRAINT_CODES:
            if marker in text:
                return cls(text, error_code=code, details={"cause": type(exc).__name__})
        return cls(text or "Storage operation failed", details={"cause": type(exc).__name__})


class FileSystemError(GoNextException):
    """Raised when a photo file operation fails."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.FILE_SYSTEM_ERROR,
            details={"path": path} if path else None,
        )
        self.path = path


class PhotosUnsupportedError(GoNextException):
    """Raised when photo mutations are attempted with the disabled photo backend."""

    def __init__(self, operation: str):
        super().__init__(
            message=f"Photo operation '{operation}' is not supported by this photo store",
            error_code=ErrorCode.PHOTOS_UNSUPPORTED,
            details={"operation": operation},
        )
