"""
Paginated catalog scraper for the public products.json feed
"""

from dataclasses import dataclass, field
from typing import List, Optional

import httpx

from catalog_sync.core.config.settings import ScraperSettings
from catalog_sync.core.exceptions import NetworkError, error_message
from catalog_sync.core.http_client import BaseAPIClient
from catalog_sync.core.logging import get_logger
from catalog_sync.domains.shopify.models import (
    FailedRecord,
    InvalidRecord,
    SourceProduct,
    SourceVariant,
    parse_product,
)
from catalog_sync.shared.constants import INVALID_VARIANT_RECORD, PRODUCTS_ENDPOINT
from catalog_sync.shared.retry import RetryPolicy

logger = get_logger(__name__)


@dataclass
class ScrapeResult:
    products: List[SourceProduct] = field(default_factory=list)
    variants: List[SourceVariant] = field(default_factory=list)
    failed_products: List[FailedRecord] = field(default_factory=list)
    total_pages: int = 0


class ProductScraper(BaseAPIClient):
    """Walks products.json page by page until an empty page"""

    def __init__(
        self,
        settings: ScraperSettings,
        retry_policy: RetryPolicy,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(
            timeout_ms=settings.REQUEST_TIMEOUT_MS,
            user_agent=settings.USER_AGENT,
            http_client=http_client,
        )
        self.retry_policy = retry_policy
        self.record_invalid_variants = (
            settings.INVALID_VARIANT_POLICY == INVALID_VARIANT_RECORD
        )

    async def fetch_page(self, hostname: str, page: int) -> list:
        """Fetch one page of raw products, retried"""
        url = f"https://{hostname}{PRODUCTS_ENDPOINT}"

        async def fetch():
            data = await self._get_json(url, params={"page": page})
            products = data.get("products") if isinstance(data, dict) else None
            if products is None:
                return []
            if not isinstance(products, list):
                raise NetworkError("Response products is not a list", url=url)
            return products

        return await self.retry_policy.run(fetch, f"Page {page} of {hostname}")

    async def scrape(self, hostname: str) -> ScrapeResult:
        """Collect every product and variant the storefront publishes.

        A page that still fails after its retries ends pagination; whatever
        was collected before it is returned.
        """
        logger.info("Scraping products", domain=hostname)
        result = ScrapeResult()
        page = 1

        while True:
            try:
                raw_products = await self.fetch_page(hostname, page)
            except Exception as e:
                logger.error(
                    "Failed to scrape page, stopping pagination",
                    domain=hostname,
                    page=page,
                    error=error_message(e),
                )
                break

            if not raw_products:
                logger.debug("No more products, stopping pagination", page=page)
                break

            logger.info(f"Page {page}: found {len(raw_products)} products", domain=hostname)
            for raw in raw_products:
                self._collect(raw, result)

            result.total_pages = page
            page += 1

            delay = self.retry_policy.rate_limit_delay()
            logger.debug(f"Waiting {delay}ms before next page")
            await self.retry_policy.sleep(delay)

        logger.info(
            "Scrape complete",
            domain=hostname,
            products=len(result.products),
            variants=len(result.variants),
            pages=result.total_pages,
            failed=len(result.failed_products),
        )
        return result

    def _collect(self, raw, result: ScrapeResult) -> None:
        parsed = parse_product(raw)
        if isinstance(parsed, InvalidRecord):
            logger.warning("Skipping product", title=parsed.title, error=parsed.error)
            result.failed_products.append(
                FailedRecord(title=parsed.title, error=parsed.error)
            )
            return

        result.products.append(parsed)
        result.variants.extend(parsed.variants)

        for invalid in parsed.invalid_variants:
            logger.warning("Skipping variant", title=invalid.title, error=invalid.error)
            if self.record_invalid_variants:
                result.failed_products.append(
                    FailedRecord(title=invalid.title, error=invalid.error)
                )
