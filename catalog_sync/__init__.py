"""
Shopify storefront catalog scraper and sync pipeline
"""

from catalog_sync.shared.constants import VERSION

__version__ = VERSION
