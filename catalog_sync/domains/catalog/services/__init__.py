"""
Remote catalog services
"""

from .auth_service import AuthService, AuthResult
from .sync_client import (
    CatalogSyncClient,
    SyncBatch,
    SyncSummary,
    SyncResult,
    DeleteResult,
)

__all__ = [
    "AuthService",
    "AuthResult",
    "CatalogSyncClient",
    "SyncBatch",
    "SyncSummary",
    "SyncResult",
    "DeleteResult",
]
