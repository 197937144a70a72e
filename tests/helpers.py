"""
Helpers shared by the catalog sync tests
"""

import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

import httpx

API_URL = "https://api.test/graphql"
SUPABASE_URL = "https://auth.test"


class FakeSleep:
    """Records requested delays instead of waiting"""

    def __init__(self):
        self.calls: List[int] = []

    async def __call__(self, ms: int) -> None:
        self.calls.append(ms)


def mock_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def json_body(request: httpx.Request) -> Dict[str, Any]:
    return json.loads(request.content)


def read_json(path: Union[str, Path]) -> Any:
    with Path(path).open("r", encoding="utf-8") as f:
        return json.load(f)


def make_variant(
    variant_id: Any,
    title: str = "Default Title",
    price: Any = "10.00",
    product_id: Optional[Any] = None,
    **extra,
) -> Dict[str, Any]:
    variant = {"id": variant_id, "title": title, "price": price}
    if product_id is not None:
        variant["product_id"] = product_id
    variant.update(extra)
    return variant


def make_product(
    product_id: Any,
    title: Optional[str] = "Product",
    variants: Optional[List[Dict[str, Any]]] = None,
    **extra,
) -> Dict[str, Any]:
    product = {
        "id": product_id,
        "title": title,
        "handle": f"product-{product_id}",
        "variants": variants
        if variants is not None
        else [make_variant(product_id * 10, product_id=product_id)],
    }
    product.update(extra)
    return product


