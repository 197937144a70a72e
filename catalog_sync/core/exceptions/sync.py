"""
Remote sync exceptions
"""

from typing import Optional
from .base import CatalogSyncException


class RemoteMutationError(CatalogSyncException):
    """Raised when a GraphQL mutation is rejected by the remote catalog API"""

    def __init__(
        self,
        message: str,
        operation: str = "unknown",
        batch: Optional[int] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(
            message,
            "REMOTE_MUTATION_ERROR",
            {"operation": operation, "batch": batch},
            cause,
        )
        self.operation = operation
        self.batch = batch
