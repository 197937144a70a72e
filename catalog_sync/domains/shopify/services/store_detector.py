"""
Storefront detection and shop metadata
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from catalog_sync.core.config.settings import ScraperSettings
from catalog_sync.core.exceptions import (
    NetworkError,
    NotShopifyStoreError,
    StoreDetectionError,
    error_message,
)
from catalog_sync.core.http_client import BaseAPIClient
from catalog_sync.core.logging import get_logger
from catalog_sync.shared.constants import (
    DEFAULT_CURRENCY,
    PRODUCTS_ENDPOINT,
    SHOP_ENDPOINT,
    STOREFRONT_GRAPHQL_ENDPOINT,
)
from catalog_sync.shared.helpers.validation_utils import validate_required_fields
from catalog_sync.shared.retry import RetryPolicy

logger = get_logger(__name__)

BRANDING_QUERY = """
query {
  shop {
    name
    description
    brand {
      logo {
        image {
          url
        }
      }
      shortDescription
    }
  }
}
"""


@dataclass
class DetectionResult:
    is_shopify: bool
    error: Optional[str] = None
    error_code: Optional[str] = None

    def to_exception(self) -> NetworkError:
        """Exception matching a negative detection"""
        if self.error_code == "NOT_SHOPIFY_STORE":
            return NotShopifyStoreError(self.error or "Not a Shopify store")
        return StoreDetectionError(self.error or "Detection failed")


@dataclass
class ShopInfo:
    currency: str = DEFAULT_CURRENCY
    name: Optional[str] = None
    shop_owner: Optional[str] = None
    logo_url: Optional[str] = None
    description: Optional[str] = None


class StoreDetector(BaseAPIClient):
    """Confirms a host serves the public catalog feed and reads its shop metadata"""

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

    async def detect(self, hostname: str) -> DetectionResult:
        """Check that https://{hostname}/products.json returns a product list"""
        logger.info("Detecting Shopify store", domain=hostname)
        url = f"https://{hostname}{PRODUCTS_ENDPOINT}"

        async def fetch():
            data = await self._get_json(url)
            if not isinstance(data, dict) or not isinstance(data.get("products"), list):
                raise NetworkError("Response missing products array", url=url)
            return data

        try:
            await self.retry_policy.run(fetch, f"Detection of {hostname}")
        except NetworkError as e:
            if e.status_code == 404:
                logger.info("Not a Shopify store (404 on products.json)", domain=hostname)
                return DetectionResult(
                    is_shopify=False,
                    error=f"not a Shopify store: no products.json endpoint found at {hostname}",
                    error_code="NOT_SHOPIFY_STORE",
                )
            return self._detection_failed(hostname, e)
        except Exception as e:
            return self._detection_failed(hostname, e)

        logger.info("Shopify store detected", domain=hostname)
        return DetectionResult(is_shopify=True)

    def _detection_failed(self, hostname: str, error: Exception) -> DetectionResult:
        message = error_message(error)
        logger.warning("Detection failed", domain=hostname, error=message)
        return DetectionResult(
            is_shopify=False,
            error=f"Detection failed: {message}",
            error_code="DETECTION_FAILED",
        )

    async def get_shop_info(self, hostname: str) -> ShopInfo:
        """Currency and branding for a store. Never raises."""
        info = ShopInfo()

        shop = await self._fetch_shop(hostname)
        if shop:
            info.currency = _currency(shop)
            info.name = _text(shop.get("name"))
            info.shop_owner = _text(shop.get("shop_owner"))

        branding = await self._fetch_branding(hostname)
        info.logo_url = branding.get("logo_url")
        info.description = branding.get("description")

        logger.debug(
            "Shop info resolved",
            domain=hostname,
            currency=info.currency,
            has_logo=info.logo_url is not None,
        )
        return info

    async def _fetch_shop(self, hostname: str) -> Optional[Dict[str, Any]]:
        url = f"https://{hostname}{SHOP_ENDPOINT}"
        try:
            data = await self.retry_policy.run(
                lambda: self._get_json(url), f"Shop info fetch for {hostname}"
            )
        except Exception as e:
            logger.warning(
                "Failed to fetch shop info, using defaults",
                domain=hostname,
                error=error_message(e),
            )
            return None

        shop = data.get("shop") if isinstance(data, dict) else None
        if not isinstance(shop, dict):
            logger.warning("No shop data in response", domain=hostname)
            return None
        return shop

    async def _fetch_branding(self, hostname: str) -> Dict[str, Optional[str]]:
        url = f"https://{hostname}{STOREFRONT_GRAPHQL_ENDPOINT}"
        try:
            data = await self.retry_policy.run(
                lambda: self._post_json(url, {"query": BRANDING_QUERY}),
                f"Storefront GraphQL fetch for {hostname}",
            )
        except Exception as e:
            logger.debug(
                "Failed to fetch branding", domain=hostname, error=error_message(e)
            )
            return {}

        payload = data.get("data") if isinstance(data, dict) else None
        shop = payload.get("shop") if isinstance(payload, dict) else None
        if not isinstance(shop, dict):
            logger.debug("No branding data from storefront GraphQL", domain=hostname)
            return {}

        brand = shop.get("brand") if isinstance(shop.get("brand"), dict) else {}
        logo = brand.get("logo") if isinstance(brand.get("logo"), dict) else {}
        image = logo.get("image") if isinstance(logo.get("image"), dict) else {}
        description = _text(brand.get("shortDescription")) or _text(shop.get("description"))

        return {"logo_url": _text(image.get("url")), "description": description}


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _currency(shop: Dict[str, Any]) -> str:
    """ISO currency code from shop.json, or the default when absent or malformed"""
    if not validate_required_fields(shop, ("currency",), "shop info"):
        return DEFAULT_CURRENCY

    currency = shop["currency"]
    if not isinstance(currency, str) or not currency.strip():
        logger.warning("Ignoring malformed shop currency", currency=repr(currency))
        return DEFAULT_CURRENCY
    return currency.strip()
