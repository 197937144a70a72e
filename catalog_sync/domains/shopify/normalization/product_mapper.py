"""
Maps storefront products and variants into the destination catalog schema
"""

from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, List, Optional, TypeVar, Union

from pydantic import ValidationError as PydanticValidationError

from catalog_sync.core.exceptions import (
    InvalidProductError,
    InvalidVariantError,
    error_message,
)
from catalog_sync.core.logging import get_logger
from catalog_sync.domains.shopify.models import (
    FailedRecord,
    MappedProduct,
    MappedVariant,
    SourceProduct,
    SourceVariant,
)
from catalog_sync.shared.constants import (
    DEFAULT_CURRENCY,
    DEFAULT_INVENTORY_POLICY,
    DEFAULT_PRODUCT_STATUS,
    DEFAULT_WEIGHT_UNIT,
    KILOGRAM_UNITS,
    OUNCE_TO_KG,
    OUNCE_UNITS,
    POUND_TO_KG,
    POUND_UNITS,
)
from catalog_sync.shared.helpers.validation_utils import (
    is_valid_inventory,
    is_valid_price,
)

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass
class MappingResult(Generic[T]):
    items: List[T] = field(default_factory=list)
    failed: List[FailedRecord] = field(default_factory=list)


def _as_product(raw: Union[SourceProduct, dict]) -> SourceProduct:
    if isinstance(raw, SourceProduct):
        return raw
    return SourceProduct.model_validate(raw or {})


def _as_variant(raw: Union[SourceVariant, dict]) -> SourceVariant:
    if isinstance(raw, SourceVariant):
        return raw
    return SourceVariant.model_validate(raw or {})


def parse_tags(tags: Any) -> Optional[List[str]]:
    """Split comma-separated tags, trimming and dropping empties"""
    if isinstance(tags, str):
        tokens = [tag.strip() for tag in tags.split(",")]
    elif isinstance(tags, list):
        tokens = [str(tag).strip() for tag in tags if tag is not None]
    else:
        return None

    tokens = [tag for tag in tokens if tag]
    return tokens or None


def format_price(value: Any) -> str:
    """Price as a string, keeping whatever precision the source used"""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def convert_weight(weight: Optional[float], unit: Optional[str]) -> Optional[float]:
    """Weight in kilograms, or None for zero or absent weights"""
    if not weight or weight <= 0:
        return None

    unit = (unit or "").strip().lower()
    if unit in KILOGRAM_UNITS:
        return weight
    if unit in POUND_UNITS:
        return weight * POUND_TO_KG
    if unit in OUNCE_UNITS:
        return weight * OUNCE_TO_KG
    # grams, and anything unrecognized
    return weight / 1000


def map_product(raw: Union[SourceProduct, dict]) -> MappedProduct:
    """Map one product. Raises InvalidProductError listing every problem."""
    product = _as_product(raw)

    reasons = []
    if not product.title:
        reasons.append("Missing title")
    if product.id is None or product.id == "" or product.id == 0:
        reasons.append("Missing product ID")
    if reasons:
        raise InvalidProductError(reasons, record_id=product.id)

    seo = product.seo
    return MappedProduct(
        shopify_id=str(product.id),
        title=product.title,
        handle=product.handle or None,
        description=product.body_html or None,
        product_type=product.product_type or None,
        vendor=product.vendor or None,
        images=[image.src for image in product.images if image.src],
        tags=parse_tags(product.tags),
        status=product.status or DEFAULT_PRODUCT_STATUS,
        seo_title=(seo.title if seo else None) or None,
        seo_description=(seo.description if seo else None) or None,
        category={"name": product.product_type} if product.product_type else None,
        gender=None,
    )


def map_variant(
    raw: Union[SourceVariant, dict],
    parent_product_id: Any,
    currency: str = DEFAULT_CURRENCY,
) -> MappedVariant:
    """Map one variant. Raises InvalidVariantError listing every problem."""
    variant = _as_variant(raw)

    reasons = []
    if not variant.id:
        reasons.append("Missing variant ID")
    if not variant.title:
        reasons.append("Missing variant title")
    if not is_valid_price(variant.price):
        reasons.append(f"Invalid price: {variant.price}")
    if parent_product_id is None or parent_product_id == "":
        reasons.append("Missing product ID")
    if reasons:
        raise InvalidVariantError(reasons, record_id=variant.id)

    if is_valid_inventory(variant.inventory_quantity):
        inventory_quantity = int(variant.inventory_quantity)
    else:
        inventory_quantity = 0

    return MappedVariant(
        shopify_variant_id=str(variant.id),
        shopify_product_id=str(parent_product_id),
        shopify_inventory_item_id=(
            str(variant.inventory_item_id) if variant.inventory_item_id else None
        ),
        title=variant.title,
        sku=variant.sku or None,
        position=variant.position or 1,
        price=format_price(variant.price),
        compare_at_price=(
            format_price(variant.compare_at_price)
            if variant.compare_at_price
            else None
        ),
        cost_price=None,
        inventory_quantity=inventory_quantity,
        inventory_tracked=variant.tracked is not False,
        inventory_policy=variant.inventory_policy or DEFAULT_INVENTORY_POLICY,
        weight=convert_weight(variant.weight, variant.weight_unit),
        weight_unit=DEFAULT_WEIGHT_UNIT,
        requires_shipping=variant.requires_shipping is not False,
        option1=variant.option1 or None,
        option2=variant.option2 or None,
        option3=variant.option3 or None,
        available=variant.available is not False,
        currency=currency or DEFAULT_CURRENCY,
    )


def _failure_title(raw: Any, fallback: str) -> str:
    title = raw.get("title") if isinstance(raw, dict) else getattr(raw, "title", None)
    return str(title) if title else fallback


def map_all_products(
    products: Iterable[Union[SourceProduct, dict]],
) -> MappingResult[MappedProduct]:
    """Map every product, collecting failures instead of raising"""
    result: MappingResult[MappedProduct] = MappingResult()

    for raw in products:
        try:
            result.items.append(map_product(raw))
        except (InvalidProductError, PydanticValidationError) as e:
            message = error_message(e)
            result.failed.append(
                FailedRecord(title=_failure_title(raw, "Unknown"), error=message)
            )
            logger.warning("Failed to map product", error=message)

    return result


def map_all_variants(
    variants: Iterable[Union[SourceVariant, dict]],
    currency: str = DEFAULT_CURRENCY,
) -> MappingResult[MappedVariant]:
    """Map every variant against its own product_id, collecting failures"""
    result: MappingResult[MappedVariant] = MappingResult()

    for raw in variants:
        if isinstance(raw, dict):
            variant_id, parent_id = raw.get("id"), raw.get("product_id")
        else:
            variant_id, parent_id = raw.id, raw.product_id

        try:
            result.items.append(map_variant(raw, parent_id, currency))
        except (InvalidVariantError, PydanticValidationError) as e:
            message = error_message(e)
            result.failed.append(
                FailedRecord(title=_failure_title(raw, str(variant_id)), error=message)
            )
            logger.warning("Failed to map variant", error=message)

    return result
