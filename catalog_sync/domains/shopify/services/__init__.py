"""
Shopify storefront services
"""

from .domain_normalizer import normalize_domain, format_store_name, create_store_handle
from .store_detector import StoreDetector, DetectionResult, ShopInfo
from .product_scraper import ProductScraper, ScrapeResult

__all__ = [
    "normalize_domain",
    "format_store_name",
    "create_store_handle",
    "StoreDetector",
    "DetectionResult",
    "ShopInfo",
    "ProductScraper",
    "ScrapeResult",
]
