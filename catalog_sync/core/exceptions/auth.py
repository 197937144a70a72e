"""
Authentication exceptions
"""

from typing import Optional
from .base import CatalogSyncException


class AuthenticationError(CatalogSyncException):
    """Raised when the identity provider refuses the credentials"""

    def __init__(
        self,
        message: str,
        email: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, "AUTHENTICATION_ERROR", {"email": email}, cause)
