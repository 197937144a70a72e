"""
GraphQL client for the remote catalog API
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx

from catalog_sync.core.config.settings import SyncSettings
from catalog_sync.core.exceptions import RemoteMutationError, error_message
from catalog_sync.core.http_client import BaseAPIClient
from catalog_sync.core.logging import get_logger
from catalog_sync.domains.shopify.models import (
    MappedProduct,
    MappedVariant,
    ScrapeOutput,
)
from catalog_sync.shared.retry import RetryPolicy

logger = get_logger(__name__)

SYNC_MUTATION = """
mutation SyncScrapedStore(
  $store: ScrapedStoreDataInput!
  $products: [ScrapedProductInput!]!
  $variants: [ScrapedProductVariantInput!]!
) {
  syncScrapedStoreAndProducts(
    store: $store
    products: $products
    variants: $variants
  ) {
    success
    message
    storeId
    productsCreated
    variantsCreated
    errors
  }
}
"""

DELETE_MUTATION = """
mutation DeleteStore($storeid: ID!) {
  deleteStore(storeid: $storeid)
}
"""


@dataclass
class SyncBatch:
    number: int
    products: List[MappedProduct]
    variants: List[MappedVariant]


@dataclass
class SyncSummary:
    """Aggregated outcome of every batch"""

    store_id: Optional[str] = None
    products_created: int = 0
    variants_created: int = 0
    batches: int = 0
    errors: List[str] = field(default_factory=list)


@dataclass
class SyncResult:
    success: bool
    message: str
    result: Optional[SyncSummary] = None


@dataclass
class DeleteResult:
    success: bool
    message: str


def _graphql_errors(data: Dict[str, Any]) -> Optional[str]:
    errors = data.get("errors")
    if not errors:
        return None
    messages = [
        (e.get("message") if isinstance(e, dict) else str(e)) or "Unknown error"
        for e in errors
    ]
    return ", ".join(messages)


def _count(value: Any) -> int:
    """Created-record counter from a mutation result; malformed values count as 0"""
    if isinstance(value, bool):
        return 0
    try:
        return max(int(value or 0), 0)
    except (TypeError, ValueError, OverflowError):
        logger.warning("Ignoring malformed created count", value=repr(value))
        return 0


class CatalogSyncClient(BaseAPIClient):
    """Pushes a scrape output to the remote catalog in product batches"""

    def __init__(
        self,
        settings: SyncSettings,
        retry_policy: RetryPolicy,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(timeout_ms=settings.SYNC_TIMEOUT_MS, http_client=http_client)
        self.settings = settings
        self.retry_policy = retry_policy

    @staticmethod
    def partition_batches(
        products: Sequence[MappedProduct],
        variants: Sequence[MappedVariant],
        batch_size: int,
    ) -> Tuple[List[SyncBatch], List[MappedVariant]]:
        """Split products into batches, each carrying exactly its own variants.

        Returns the batches and the variants whose product is not in the run.
        An empty catalog still yields one batch so the store record is sent.
        """
        by_product: Dict[str, List[MappedVariant]] = {}
        for variant in variants:
            by_product.setdefault(variant.shopify_product_id, []).append(variant)

        known = {product.shopify_id for product in products}
        orphans = [v for v in variants if v.shopify_product_id not in known]

        batches = []
        for start in range(0, len(products), batch_size):
            chunk = list(products[start : start + batch_size])
            chunk_variants = [
                variant
                for product in chunk
                for variant in by_product.pop(product.shopify_id, [])
            ]
            batches.append(SyncBatch(len(batches) + 1, chunk, chunk_variants))

        if not batches:
            batches.append(SyncBatch(1, [], []))

        return batches, orphans

    def _auth_headers(self, token: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {token}", "Content-Type": "application/json"}

    async def _execute_batch(
        self, token: str, store: Dict[str, Any], batch: SyncBatch
    ) -> Dict[str, Any]:
        payload = {
            "query": SYNC_MUTATION,
            "variables": {
                "store": store,
                "products": [p.model_dump(mode="json") for p in batch.products],
                "variants": [v.model_dump(mode="json") for v in batch.variants],
            },
        }

        data = await self.retry_policy.run(
            lambda: self._post_json(
                self.settings.CATALOG_API_URL,
                payload,
                headers=self._auth_headers(token),
                timeout_ms=self.settings.SYNC_TIMEOUT_MS,
            ),
            f"GraphQL sync request (batch {batch.number})",
        )
        if not isinstance(data, dict):
            raise RemoteMutationError(
                "No mutation result in response", "syncScrapedStoreAndProducts", batch.number
            )

        graphql_errors = _graphql_errors(data)
        if graphql_errors:
            raise RemoteMutationError(
                f"GraphQL error: {graphql_errors}",
                "syncScrapedStoreAndProducts",
                batch.number,
            )

        mutation = (data.get("data") or {}).get("syncScrapedStoreAndProducts")
        if not isinstance(mutation, dict):
            raise RemoteMutationError(
                "No mutation result in response", "syncScrapedStoreAndProducts", batch.number
            )
        return mutation

    async def sync(self, token: str, scrape_output: ScrapeOutput) -> SyncResult:
        """Sync the store and its catalog, one mutation per product batch.

        A failed batch is recorded and the remaining batches still run.
        """
        batches, orphans = self.partition_batches(
            scrape_output.products,
            scrape_output.product_variants,
            self.settings.SYNC_BATCH_SIZE,
        )
        if orphans:
            logger.warning(
                "Variants without a product in this run will not be synced",
                count=len(orphans),
                variant_ids=[v.shopify_variant_id for v in orphans[:10]],
            )

        store = scrape_output.store.model_dump(mode="json")
        summary = SyncSummary(batches=len(batches))
        total = len(batches)

        logger.info(
            "Syncing catalog",
            api_url=self.settings.CATALOG_API_URL,
            products=len(scrape_output.products),
            batches=total,
        )

        for batch in batches:
            prefix = f"Batch {batch.number}/{total}"
            try:
                mutation = await self._execute_batch(token, store, batch)
            except RemoteMutationError as e:
                logger.error("Batch rejected", batch=batch.number, error=e.message)
                summary.errors.append(f"{prefix}: {e.message}")
                continue
            except Exception as e:
                message = error_message(e)
                logger.error("Batch failed", batch=batch.number, error=message)
                summary.errors.append(f"{prefix}: Sync error: {message}")
                continue

            products_created = _count(mutation.get("productsCreated"))
            variants_created = _count(mutation.get("variantsCreated"))

            if not mutation.get("success"):
                message = mutation.get("message") or "Mutation failed"
                logger.error("Batch mutation failed", batch=batch.number, error=message)
                summary.errors.append(f"{prefix}: {message}")
            elif products_created < len(batch.products):
                logger.warning(
                    "Batch created fewer products than submitted",
                    batch=batch.number,
                    submitted=len(batch.products),
                    created=products_created,
                )

            if not summary.store_id and mutation.get("storeId"):
                summary.store_id = mutation["storeId"]
            summary.products_created += products_created
            summary.variants_created += variants_created
            remote_errors = mutation.get("errors") or []
            if not isinstance(remote_errors, list):
                remote_errors = [remote_errors]
            for remote_error in remote_errors:
                summary.errors.append(f"{prefix}: {remote_error}")

        if summary.errors:
            message = f"Sync completed with {len(summary.errors)} error(s)"
            logger.error(message, store_id=summary.store_id)
            return SyncResult(success=False, message=message, result=summary)

        message = (
            f"Synced {summary.products_created} products and "
            f"{summary.variants_created} variants in {total} batch(es)"
        )
        logger.info(message, store_id=summary.store_id)
        return SyncResult(success=True, message=message, result=summary)

    async def delete_store(self, token: str, store_id: str) -> DeleteResult:
        """Delete a previously synced store"""
        logger.info("Deleting store", store_id=store_id)
        payload = {"query": DELETE_MUTATION, "variables": {"storeid": store_id}}

        try:
            data = await self.retry_policy.run(
                lambda: self._post_json(
                    self.settings.CATALOG_API_URL,
                    payload,
                    headers=self._auth_headers(token),
                    timeout_ms=self.settings.DELETE_TIMEOUT_MS,
                ),
                "GraphQL delete request",
            )
        except Exception as e:
            message = error_message(e)
            logger.error("Delete error", store_id=store_id, error=message)
            return DeleteResult(success=False, message=f"Delete error: {message}")

        data = data if isinstance(data, dict) else {}
        graphql_errors = _graphql_errors(data)
        if graphql_errors:
            logger.error("GraphQL error", store_id=store_id, error=graphql_errors)
            return DeleteResult(success=False, message=f"GraphQL error: {graphql_errors}")

        deleted = (data.get("data") or {}).get("deleteStore")
        if deleted is None:
            logger.error("No delete result in response", store_id=store_id)
            return DeleteResult(success=False, message="No delete result in response")

        if not deleted:
            logger.error("Delete mutation returned false", store_id=store_id)
            return DeleteResult(success=False, message="Delete mutation failed")

        logger.info("Store deleted", store_id=store_id)
        return DeleteResult(success=True, message=f"Store {store_id} deleted successfully")
