"""
Scrape -> map -> sync orchestration for a single store
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx

from catalog_sync.core.config.settings import Settings
from catalog_sync.core.exceptions import (
    AuthenticationError,
    CatalogSyncException,
    InvalidDomainError,
    error_message,
)
from catalog_sync.core.logging import get_logger
from catalog_sync.domains.catalog.services import (
    AuthService,
    CatalogSyncClient,
    DeleteResult,
    SyncResult,
)
from catalog_sync.domains.shopify.models import FailedRecord, ScrapeOutput, StoreRecord
from catalog_sync.domains.shopify.normalization import map_all_products, map_all_variants
from catalog_sync.domains.shopify.services import (
    ProductScraper,
    ShopInfo,
    StoreDetector,
    create_store_handle,
    format_store_name,
    normalize_domain,
)
from catalog_sync.shared.helpers.file_utils import safe_filename, write_json
from catalog_sync.shared.retry import RetryPolicy, SleepFunc

logger = get_logger(__name__)


@dataclass
class PipelineResult:
    """Outcome of one pipeline run"""

    success: bool
    domain: Optional[str] = None
    data: Optional[ScrapeOutput] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    failed_products: List[FailedRecord] = field(default_factory=list)
    failed_variants: List[FailedRecord] = field(default_factory=list)
    total_pages: int = 0
    sync: Optional[SyncResult] = None
    output_path: Optional[str] = None

    @classmethod
    def failure(cls, error: BaseException, domain: Optional[str] = None) -> "PipelineResult":
        return cls(
            success=False,
            domain=domain,
            error=error_message(error),
            error_code=getattr(error, "error_code", None),
        )

    def summary(self) -> Dict[str, Any]:
        """Diagnostics document written next to the scrape output"""
        summary: Dict[str, Any] = {
            "domain": self.domain,
            "success": self.success,
            "error": self.error,
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "total_pages": self.total_pages,
            "products": len(self.data.products) if self.data else 0,
            "variants": len(self.data.product_variants) if self.data else 0,
            "failed_products": [f.model_dump() for f in self.failed_products],
            "failed_variants": [f.model_dump() for f in self.failed_variants],
            "sync": None,
        }
        if self.sync is not None:
            sync_summary = self.sync.result
            summary["sync"] = {
                "success": self.sync.success,
                "message": self.sync.message,
                "store_id": sync_summary.store_id if sync_summary else None,
                "products_created": sync_summary.products_created if sync_summary else 0,
                "variants_created": sync_summary.variants_created if sync_summary else 0,
                "batches": sync_summary.batches if sync_summary else 0,
                "errors": list(sync_summary.errors) if sync_summary else [],
            }
        return summary


def build_store_record(
    domain: str,
    shop_info: ShopInfo,
    logo_url: Optional[str] = None,
    description: Optional[str] = None,
) -> StoreRecord:
    """Store metadata. Values given on the command line win over shop info."""
    store_url = f"https://{domain}"
    return StoreRecord(
        display_name=format_store_name(domain),
        store_handle=create_store_handle(domain),
        store_url=store_url,
        shopify_store_url=store_url,
        default_currency=shop_info.currency,
        supported_currencies=[shop_info.currency],
        logo_url=logo_url or shop_info.logo_url or None,
        description=description or shop_info.description or None,
    )


class ScrapePipeline:
    """Runs normalize, detect, scrape, map and (optionally) sync for one store"""

    def __init__(
        self,
        settings: Settings,
        http_client: Optional[httpx.AsyncClient] = None,
        sleep_func: Optional[SleepFunc] = None,
    ):
        self.settings = settings
        self.retry_policy = RetryPolicy.from_settings(settings.scraper, sleep_func)

        self.detector = StoreDetector(settings.scraper, self.retry_policy, http_client)
        self.scraper = ProductScraper(settings.scraper, self.retry_policy, http_client)
        self.auth_service = AuthService(
            settings.auth, http_client, timeout_ms=settings.scraper.REQUEST_TIMEOUT_MS
        )
        self.sync_client = CatalogSyncClient(settings.sync, self.retry_policy, http_client)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        for client in (self.detector, self.scraper, self.auth_service, self.sync_client):
            await client.close()

    async def scrape_store(
        self,
        domain: str,
        logo_url: Optional[str] = None,
        description: Optional[str] = None,
    ) -> PipelineResult:
        """Scrape and map one store, then persist the output. Never raises."""
        try:
            hostname = normalize_domain(domain)
        except InvalidDomainError as e:
            logger.error("Scraping failed", error=e.message)
            return PipelineResult.failure(e)

        try:
            result = await self._scrape(hostname, logo_url, description)
        except CatalogSyncException as e:
            logger.error("Scraping failed", domain=hostname, error=e.message)
            return PipelineResult.failure(e, hostname)
        except Exception as e:
            logger.exception("Unexpected error while scraping", domain=hostname)
            result = PipelineResult.failure(e, hostname)
            result.error_code = "SCRAPE_FAILED"
            return result

        self._persist(result)
        return result

    async def _scrape(
        self, hostname: str, logo_url: Optional[str], description: Optional[str]
    ) -> PipelineResult:
        logger.info("Checking storefront", domain=hostname)
        detection = await self.detector.detect(hostname)
        if not detection.is_shopify:
            raise detection.to_exception()

        scraped = await self.scraper.scrape(hostname)

        logger.info("Mapping products", count=len(scraped.products))
        products = map_all_products(scraped.products)

        logger.info("Mapping variants", count=len(scraped.variants))
        variants = map_all_variants(scraped.variants)

        shop_info = await self.detector.get_shop_info(hostname)
        logger.info("Shop information resolved", currency=shop_info.currency)

        store = build_store_record(hostname, shop_info, logo_url, description)
        output = ScrapeOutput(
            store=store, products=products.items, product_variants=variants.items
        )

        failed_products = list(scraped.failed_products) + products.failed
        logger.info(
            "Scraping complete",
            domain=hostname,
            products=len(output.products),
            variants=len(output.product_variants),
            failed=len(failed_products) + len(variants.failed),
            pages=scraped.total_pages,
        )

        return PipelineResult(
            success=True,
            domain=hostname,
            data=output,
            failed_products=failed_products,
            failed_variants=variants.failed,
            total_pages=scraped.total_pages,
        )

    async def scrape_and_sync(
        self,
        domain: str,
        email: str,
        password: str,
        logo_url: Optional[str] = None,
        description: Optional[str] = None,
    ) -> PipelineResult:
        """Scrape a store, authenticate and push the catalog to the remote API"""
        result = await self.scrape_store(domain, logo_url, description)
        if not result.success:
            return result

        auth = await self.auth_service.authenticate(email, password)
        try:
            token = auth.raise_for_failure(email)
        except AuthenticationError as e:
            logger.error("Authentication failed", error=e.message)
            result.success = False
            result.error = f"Authentication failed: {e.message}"
            result.error_code = e.error_code
            self._write_summary(result)
            return result

        result.sync = await self.sync_client.sync(token, result.data)
        if not result.sync.success:
            result.success = False
            result.error = f"Sync failed: {result.sync.message}"
            result.error_code = "SYNC_FAILED"

        self._write_summary(result)
        return result

    async def delete_store(self, store_id: str, email: str, password: str) -> DeleteResult:
        """Authenticate and delete a synced store without scraping"""
        auth = await self.auth_service.authenticate(email, password)
        if not auth.success:
            logger.error("Authentication failed", error=auth.error)
            return DeleteResult(success=False, message=f"Authentication failed: {auth.error}")

        return await self.sync_client.delete_store(auth.token, store_id)

    def _output_path(self, domain: str, suffix: str = ".json") -> Path:
        return Path(self.settings.OUTPUT_DIR) / f"{safe_filename(domain)}{suffix}"

    def _persist(self, result: PipelineResult) -> None:
        if not self.settings.SAVE_OUTPUT or result.data is None:
            return
        try:
            path = write_json(self._output_path(result.domain), result.data.to_dict())
        except OSError as e:
            logger.error("Failed to write scrape output", domain=result.domain, error=str(e))
            return
        result.output_path = str(path)
        logger.info("Scrape output saved", path=result.output_path)
        self._write_summary(result)

    def _write_summary(self, result: PipelineResult) -> None:
        if not self.settings.SAVE_OUTPUT or not result.domain:
            return
        try:
            write_json(self._output_path(result.domain, ".summary.json"), result.summary())
        except OSError as e:
            logger.error("Failed to write run summary", domain=result.domain, error=str(e))
