"""
Storefront catalog data models
"""

from .source import (
    SourceImage,
    SourceSeo,
    SourceVariant,
    SourceProduct,
    InvalidRecord,
    parse_product,
    parse_variant,
)
from .mapped import (
    MappedProduct,
    MappedVariant,
    StoreRecord,
    FailedRecord,
    ScrapeOutput,
)

__all__ = [
    "SourceImage",
    "SourceSeo",
    "SourceVariant",
    "SourceProduct",
    "InvalidRecord",
    "parse_product",
    "parse_variant",
    "MappedProduct",
    "MappedVariant",
    "StoreRecord",
    "FailedRecord",
    "ScrapeOutput",
]
