"""
Raw storefront catalog models (the public products.json feed)

Records are parsed once at the scraper boundary. A dict either becomes a
SourceProduct / SourceVariant or an InvalidRecord describing why it was
rejected; nothing half-parsed travels further down the pipeline.
"""

from typing import Any, List, Optional, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

Identifier = Union[int, str]


class InvalidRecord(BaseModel):
    """A raw record rejected at the scraper boundary"""

    kind: str
    title: str
    error: str


class SourceImage(BaseModel):
    """Product image"""

    model_config = ConfigDict(extra="ignore")

    src: Optional[str] = Field(None, validation_alias=AliasChoices("src", "url"))


class SourceSeo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    description: Optional[str] = None


class SourceVariant(BaseModel):
    """Product variant as published by the storefront"""

    model_config = ConfigDict(extra="ignore")

    id: Optional[Identifier] = None
    product_id: Optional[Identifier] = None
    title: Optional[str] = None
    price: Any = None
    compare_at_price: Any = None
    sku: Optional[str] = None
    position: Optional[int] = None
    option1: Optional[str] = None
    option2: Optional[str] = None
    option3: Optional[str] = None
    weight: Optional[float] = None
    weight_unit: Optional[str] = None
    inventory_item_id: Optional[Identifier] = None
    # Usually absent from the public feed
    inventory_quantity: Any = None
    inventory_policy: Optional[str] = None
    requires_shipping: Optional[bool] = None
    tracked: Optional[bool] = None
    available: Optional[bool] = None

    @field_validator("title", "sku", "option1", "option2", "option3", mode="before")
    @classmethod
    def _stringify(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator(
        "position",
        "weight",
        "requires_shipping",
        "tracked",
        "available",
        "inventory_item_id",
        "weight_unit",
        "inventory_policy",
        mode="wrap",
    )
    @classmethod
    def _drop_unparseable(cls, v, handler):
        # Optional attributes with junk values are treated as absent
        try:
            return handler(v)
        except ValueError:
            return None


class SourceProduct(BaseModel):
    """Product as published by the storefront"""

    model_config = ConfigDict(extra="ignore")

    id: Optional[Identifier] = None
    title: Optional[str] = None
    handle: Optional[str] = None
    body_html: Optional[str] = None
    vendor: Optional[str] = None
    product_type: Optional[str] = None
    tags: Union[str, List[str], None] = None
    status: Optional[str] = None
    images: List[SourceImage] = Field(default_factory=list)
    variants: List[SourceVariant] = Field(default_factory=list)
    seo: Optional[SourceSeo] = None

    # Variants rejected at parse time, kept for diagnostics
    invalid_variants: List[InvalidRecord] = Field(default_factory=list, exclude=True)

    @field_validator("title", mode="before")
    @classmethod
    def _stringify_title(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("images", mode="before")
    @classmethod
    def _normalize_images(cls, v):
        if not isinstance(v, list):
            return []
        images = []
        for image in v:
            if isinstance(image, str):
                images.append({"src": image})
            elif isinstance(image, dict):
                images.append(image)
        return images

    @field_validator("variants", mode="before")
    @classmethod
    def _none_as_empty(cls, v):
        return v or []

    @field_validator(
        "seo",
        "status",
        "handle",
        "body_html",
        "vendor",
        "product_type",
        "tags",
        mode="wrap",
    )
    @classmethod
    def _drop_unparseable(cls, v, handler):
        try:
            return handler(v)
        except ValueError:
            return None


def _describe(error: ValidationError) -> str:
    parts = []
    for item in error.errors(include_url=False):
        location = ".".join(str(p) for p in item.get("loc", ())) or "record"
        parts.append(f"{location}: {item.get('msg')}")
    return "; ".join(parts)


def parse_variant(
    raw: Any, product_title: str, product_id: Optional[Identifier] = None
) -> Union[SourceVariant, InvalidRecord]:
    """Parse one raw variant. Variants without product_id inherit the parent's."""
    if not isinstance(raw, dict):
        return InvalidRecord(
            kind="variant",
            title=f"{product_title} - variant ?",
            error="Variant is not an object",
        )

    label = raw.get("id") or raw.get("title") or "?"
    title = f"{product_title} - variant {label}"

    if not raw.get("id") or not raw.get("title"):
        return InvalidRecord(kind="variant", title=title, error="Missing id or title")

    try:
        variant = SourceVariant.model_validate(raw)
    except ValidationError as e:
        return InvalidRecord(kind="variant", title=title, error=_describe(e))

    if variant.product_id is None and product_id is not None:
        variant.product_id = product_id
    return variant


def parse_product(raw: Any) -> Union[SourceProduct, InvalidRecord]:
    """Parse one raw product and its variants"""
    if not isinstance(raw, dict):
        return InvalidRecord(
            kind="product", title="Unknown", error="Product is not an object"
        )

    if not raw.get("title"):
        return InvalidRecord(
            kind="product", title="Unknown", error="Product missing title"
        )

    payload = {key: value for key, value in raw.items() if key != "variants"}
    try:
        product = SourceProduct.model_validate(payload)
    except ValidationError as e:
        return InvalidRecord(kind="product", title=str(raw["title"]), error=_describe(e))

    raw_variants = raw.get("variants")
    if not isinstance(raw_variants, list):
        raw_variants = []

    for raw_variant in raw_variants:
        parsed = parse_variant(raw_variant, product.title, product.id)
        if isinstance(parsed, InvalidRecord):
            product.invalid_variants.append(parsed)
        else:
            product.variants.append(parsed)

    return product

