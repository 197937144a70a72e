"""
Destination catalog models produced by the mapper
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from catalog_sync.shared.constants import (
    DEFAULT_CURRENCY,
    DEFAULT_INVENTORY_POLICY,
    DEFAULT_PRODUCT_STATUS,
    DEFAULT_WEIGHT_UNIT,
    SHOPIFY_CONNECTION_STATUS,
)


class MappedProduct(BaseModel):
    """Product in the destination schema"""

    shopify_id: str = Field(..., description="Source product id")
    title: str
    handle: Optional[str] = None
    description: Optional[str] = None
    product_type: Optional[str] = None
    vendor: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    tags: Optional[List[str]] = None
    status: str = DEFAULT_PRODUCT_STATUS
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    category: Optional[Dict[str, str]] = None
    gender: Optional[str] = None


class MappedVariant(BaseModel):
    """Variant in the destination schema"""

    shopify_variant_id: str
    shopify_product_id: str
    shopify_inventory_item_id: Optional[str] = None
    title: str
    sku: Optional[str] = None
    position: int = 1

    # Prices stay strings so decimal precision survives the round trip
    price: str
    compare_at_price: Optional[str] = None
    cost_price: Optional[str] = None

    inventory_quantity: int = 0
    inventory_tracked: bool = True
    inventory_policy: str = DEFAULT_INVENTORY_POLICY
    weight: Optional[float] = Field(None, description="Weight in kilograms")
    weight_unit: str = DEFAULT_WEIGHT_UNIT
    requires_shipping: bool = True
    option1: Optional[str] = None
    option2: Optional[str] = None
    option3: Optional[str] = None
    available: bool = True
    currency: str = DEFAULT_CURRENCY


class StoreRecord(BaseModel):
    """Store metadata sent alongside the catalog"""

    display_name: str
    store_handle: str
    store_url: str
    shopify_store_url: str
    shopify_connected: bool = True
    shopify_connection_status: str = SHOPIFY_CONNECTION_STATUS
    default_currency: str = DEFAULT_CURRENCY
    supported_currencies: List[str] = Field(default_factory=lambda: [DEFAULT_CURRENCY])
    logo_url: Optional[str] = None
    description: Optional[str] = None


class FailedRecord(BaseModel):
    """A product or variant that could not be scraped or mapped"""

    title: str
    error: str


class ScrapeOutput(BaseModel):
    """Everything collected for one store in one run"""

    store: StoreRecord
    products: List[MappedProduct] = Field(default_factory=list)
    product_variants: List[MappedVariant] = Field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")
