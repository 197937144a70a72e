"""
Normalization of storefront records into the destination schema
"""

from .product_mapper import (
    MappingResult,
    map_product,
    map_variant,
    map_all_products,
    map_all_variants,
    parse_tags,
    convert_weight,
)

__all__ = [
    "MappingResult",
    "map_product",
    "map_variant",
    "map_all_products",
    "map_all_variants",
    "parse_tags",
    "convert_weight",
]
