"""
Validation-related exceptions
"""

from typing import Any, List, Optional
from .base import CatalogSyncException


class ValidationError(CatalogSyncException):
    """Base exception for validation errors"""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        error_code: str = "VALIDATION_ERROR",
        **kwargs
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            details={"field": field, "value": value},
            **kwargs
        )


class InvalidDomainError(ValidationError):
    """Raised when a store domain cannot be normalized into a hostname"""

    def __init__(self, domain: str, **kwargs):
        super().__init__(
            message=f"Invalid domain format: {domain}",
            field="domain",
            value=domain,
            error_code="INVALID_DOMAIN",
            **kwargs
        )
        self.domain = domain


class InvalidRecordError(ValidationError):
    """Raised when a single source record cannot be mapped"""

    record_type = "record"

    def __init__(self, reasons: List[str], record_id: Optional[Any] = None, **kwargs):
        super().__init__(
            message=f"Invalid {self.record_type}: {', '.join(reasons)}",
            field=self.record_type,
            value=record_id,
            error_code="INVALID_RECORD",
            **kwargs
        )
        self.reasons = list(reasons)
        self.details["reasons"] = self.reasons


class InvalidProductError(InvalidRecordError):
    """Raised when a product is missing mandatory fields"""

    record_type = "product"


class InvalidVariantError(InvalidRecordError):
    """Raised when a variant is missing mandatory fields or has a bad price"""

    record_type = "variant"
