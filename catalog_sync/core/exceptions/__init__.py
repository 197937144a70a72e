"""
Custom exceptions for the catalog sync pipeline
"""

from .base import CatalogSyncException, error_message
from .config import ConfigurationError
from .validation import (
    ValidationError,
    InvalidDomainError,
    InvalidRecordError,
    InvalidProductError,
    InvalidVariantError,
)
from .network import NetworkError, StoreDetectionError, NotShopifyStoreError
from .auth import AuthenticationError
from .sync import RemoteMutationError

__all__ = [
    "CatalogSyncException",
    "error_message",
    "ConfigurationError",
    "ValidationError",
    "InvalidDomainError",
    "InvalidRecordError",
    "InvalidProductError",
    "InvalidVariantError",
    "NetworkError",
    "StoreDetectionError",
    "NotShopifyStoreError",
    "AuthenticationError",
    "RemoteMutationError",
]
