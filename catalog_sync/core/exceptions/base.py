"""
Base exception class for the catalog sync pipeline
"""

from typing import Optional, Dict, Any


class CatalogSyncException(Exception):
    """Base exception for all catalog sync errors"""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging and run summaries"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "cause": str(self.cause) if self.cause else None,
            "exception_type": self.__class__.__name__,
        }


def error_message(error: BaseException) -> str:
    """Human-readable message of any exception, without the error code prefix"""
    if isinstance(error, CatalogSyncException):
        return error.message
    return str(error) or error.__class__.__name__
