"""
Network and store detection exceptions
"""

from typing import Any, Optional
from .base import CatalogSyncException


class NetworkError(CatalogSyncException):
    """Raised when an HTTP request fails or returns an unusable response"""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        error_code: str = "NETWORK_ERROR",
        cause: Optional[Exception] = None,
        response_body: Optional[Any] = None,
    ):
        super().__init__(
            message,
            error_code,
            {"url": url, "status_code": status_code},
            cause,
        )
        self.url = url
        self.status_code = status_code
        self.response_body = response_body


class StoreDetectionError(NetworkError):
    """Raised when a host could not be confirmed as a storefront"""

    def __init__(self, message: str, url: Optional[str] = None, **kwargs):
        super().__init__(message, url=url, error_code="DETECTION_FAILED", **kwargs)


class NotShopifyStoreError(NetworkError):
    """Raised when a host does not expose the public catalog feed"""

    def __init__(self, message: str, url: Optional[str] = None, **kwargs):
        super().__init__(
            message, url=url, status_code=404, error_code="NOT_SHOPIFY_STORE", **kwargs
        )
