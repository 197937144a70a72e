"""
Application-wide constants for the catalog sync pipeline
"""

PROJECT_NAME = "catalog-sync"
VERSION = "1.0.0"

USER_AGENT = "CatalogSyncScraper/1.0"

# Storefront endpoints (relative to https://{host})
PRODUCTS_ENDPOINT = "/products.json"
SHOP_ENDPOINT = "/shop.json"
STOREFRONT_GRAPHQL_ENDPOINT = "/api/graphql.json"

# Defaults
DEFAULT_CURRENCY = "USD"
DEFAULT_PRODUCT_STATUS = "active"
DEFAULT_INVENTORY_POLICY = "deny"
DEFAULT_WEIGHT_UNIT = "kg"
DEFAULT_RATE_LIMIT_DELAY_MS = 2000
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_BASE_DELAY_MS = 1000
DEFAULT_REQUEST_TIMEOUT_MS = 30000
DEFAULT_SYNC_TIMEOUT_MS = 120000
DEFAULT_DELETE_TIMEOUT_MS = 60000
DEFAULT_SYNC_BATCH_SIZE = 20

# Store record flags sent with every sync
SHOPIFY_CONNECTION_STATUS = "scraped"

# Invalid variant handling during scraping
INVALID_VARIANT_SKIP = "skip"
INVALID_VARIANT_RECORD = "record"

# Weight units understood by the mapper. Anything else is treated as grams.
GRAM_UNITS = ("g", "grams")
KILOGRAM_UNITS = ("kg", "kilograms")
POUND_UNITS = ("lb", "lbs", "pounds")
OUNCE_UNITS = ("oz", "ounces")
POUND_TO_KG = 0.453592
OUNCE_TO_KG = 0.0283495
