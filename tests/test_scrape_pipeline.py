"""
End-to-end tests for the scrape pipeline against a simulated storefront and API
"""

from unittest.mock import patch

import httpx
import pytest

from catalog_sync.services import scrape_pipeline as pipeline_module
from catalog_sync.services.scrape_pipeline import ScrapePipeline, build_store_record
from catalog_sync.domains.shopify.services import ShopInfo

from tests.helpers import json_body, make_product, make_variant, mock_client, read_json

STORE_HOST = "cool-gear-store.com"


class FakeBackend:
    """Routes requests for the storefront, identity provider and catalog API"""

    def __init__(self, is_shopify=True, auth_ok=True, sync_ok=True):
        self.is_shopify = is_shopify
        self.auth_ok = auth_ok
        self.sync_ok = sync_ok
        self.requests = []
        self.pages = [
            [
                make_product(
                    1,
                    title="Trail Jacket",
                    variants=[
                        make_variant(10, product_id=1),
                        make_variant(11, title="Bad Price", price="abc"),
                    ],
                ),
                make_product(2, title="Beanie"),
                {"id": 3, "title": None},
            ]
        ]

    def hosts(self):
        return [request.url.host for request in self.requests]

    def __call__(self, request):
        self.requests.append(request)
        host, path = request.url.host, request.url.path

        if host == STORE_HOST:
            if not self.is_shopify:
                return httpx.Response(404)
            if path == "/products.json":
                page = int(request.url.params.get("page", 1))
                products = self.pages[page - 1] if page <= len(self.pages) else []
                return httpx.Response(200, json={"products": products})
            if path == "/shop.json":
                return httpx.Response(200, json={"shop": {"currency": "EUR", "name": "Cool Gear"}})
            if path == "/api/graphql.json":
                return httpx.Response(
                    200,
                    json={
                        "data": {
                            "shop": {
                                "description": "Gear for the outdoors",
                                "brand": {"logo": {"image": {"url": "https://cdn.test/logo.png"}}},
                            }
                        }
                    },
                )

        if host == "auth.test":
            if not self.auth_ok:
                return httpx.Response(
                    400, json={"error_description": "Invalid login credentials"}
                )
            return httpx.Response(200, json={"access_token": "jwt"})

        if host == "api.test":
            body = json_body(request)
            if "deleteStore" in body["query"]:
                return httpx.Response(200, json={"data": {"deleteStore": True}})
            variables = body["variables"]
            return httpx.Response(
                200,
                json={
                    "data": {
                        "syncScrapedStoreAndProducts": {
                            "success": self.sync_ok,
                            "message": "ok" if self.sync_ok else "Store limit reached",
                            "storeId": "store-1",
                            "productsCreated": len(variables["products"]),
                            "variantsCreated": len(variables["variants"]),
                            "errors": [],
                        }
                    }
                },
            )

        return httpx.Response(404)


@pytest.fixture
def backend():
    return FakeBackend()


class TestScrapeStore:
    """Test the scrape half of the pipeline"""

    @pytest.mark.asyncio
    async def test_scrapes_maps_and_persists(self, settings, backend, fake_sleep, tmp_path):
        async with mock_client(backend) as client:
            async with ScrapePipeline(settings, client, fake_sleep) as pipeline:
                result = await pipeline.scrape_store("https://www.Cool-Gear-Store.com/collections")

        assert result.success is True
        assert result.domain == STORE_HOST
        assert result.total_pages == 1
        assert [p.title for p in result.data.products] == ["Trail Jacket", "Beanie"]
        assert [v.shopify_variant_id for v in result.data.product_variants] == ["10", "20"]
        assert [f.title for f in result.failed_products] == ["Unknown"]
        assert [f.title for f in result.failed_variants] == ["Bad Price"]

        store = result.data.store
        assert store.display_name == "Cool Gear Store"
        assert store.store_handle == "cool-gear-store"
        assert store.store_url == "https://cool-gear-store.com"
        assert store.shopify_connected is True
        assert store.default_currency == "EUR"
        assert store.supported_currencies == ["EUR"]
        assert store.logo_url == "https://cdn.test/logo.png"
        assert store.description == "Gear for the outdoors"

        output_dir = tmp_path / "output"
        saved = read_json(output_dir / "cool-gear-store.com.json")
        assert set(saved) == {"store", "products", "product_variants"}
        assert len(saved["products"]) == 2
        assert "id" not in saved["products"][0]

        summary = read_json(output_dir / "cool-gear-store.com.summary.json")
        assert summary["total_pages"] == 1
        assert summary["failed_products"] == [
            {"title": "Unknown", "error": "Product missing title"}
        ]
        assert summary["sync"] is None
        assert "auth.test" not in backend.hosts()

    @pytest.mark.asyncio
    async def test_cli_branding_overrides_shop_info(self, settings, backend, fake_sleep):
        async with mock_client(backend) as client:
            async with ScrapePipeline(settings, client, fake_sleep) as pipeline:
                result = await pipeline.scrape_store(
                    STORE_HOST, logo_url="https://example.com/mine.png", description="Mine"
                )

        assert result.data.store.logo_url == "https://example.com/mine.png"
        assert result.data.store.description == "Mine"

    @pytest.mark.asyncio
    async def test_invalid_domain_makes_no_requests(self, settings, backend, fake_sleep):
        async with mock_client(backend) as client:
            async with ScrapePipeline(settings, client, fake_sleep) as pipeline:
                result = await pipeline.scrape_store("localhost")

        assert result.success is False
        assert result.error == "Invalid domain format: localhost"
        assert result.error_code == "INVALID_DOMAIN"
        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_not_a_shopify_store(self, settings, fake_sleep, tmp_path):
        backend = FakeBackend(is_shopify=False)

        async with mock_client(backend) as client:
            async with ScrapePipeline(settings, client, fake_sleep) as pipeline:
                result = await pipeline.scrape_store(STORE_HOST)

        assert result.success is False
        assert result.error_code == "NOT_SHOPIFY_STORE"
        assert "no products.json endpoint found" in result.error
        assert not (tmp_path / "output" / "cool-gear-store.com.json").exists()

    @pytest.mark.asyncio
    async def test_numeric_shop_currency_uses_default(self, settings, fake_sleep):
        backend = FakeBackend()

        def handler(request):
            if request.url.path == "/shop.json":
                return httpx.Response(200, json={"shop": {"currency": 840}})
            return backend(request)

        async with mock_client(handler) as client:
            async with ScrapePipeline(settings, client, fake_sleep) as pipeline:
                result = await pipeline.scrape_store(STORE_HOST)

        assert result.success is True
        assert result.data.store.default_currency == "USD"
        assert result.data.product_variants[0].currency == "USD"

    @pytest.mark.asyncio
    async def test_unexpected_error_becomes_failure(self, settings, backend, fake_sleep):
        async with mock_client(backend) as client:
            async with ScrapePipeline(settings, client, fake_sleep) as pipeline:
                with patch.object(
                    pipeline_module, "build_store_record", side_effect=RuntimeError("boom")
                ):
                    result = await pipeline.scrape_store(STORE_HOST)

        assert result.success is False
        assert result.domain == STORE_HOST
        assert result.error == "boom"
        assert result.error_code == "SCRAPE_FAILED"

    @pytest.mark.asyncio
    async def test_output_can_be_disabled(self, settings, backend, fake_sleep, tmp_path):
        settings = settings.model_copy(update={"SAVE_OUTPUT": False})

        async with mock_client(backend) as client:
            async with ScrapePipeline(settings, client, fake_sleep) as pipeline:
                result = await pipeline.scrape_store(STORE_HOST)

        assert result.success is True
        assert result.output_path is None
        assert not (tmp_path / "output").exists()


class TestScrapeAndSync:
    """Test the full scrape, authenticate and sync flow"""

    @pytest.mark.asyncio
    async def test_full_run(self, settings, backend, fake_sleep, tmp_path):
        async with mock_client(backend) as client:
            async with ScrapePipeline(settings, client, fake_sleep) as pipeline:
                result = await pipeline.scrape_and_sync(STORE_HOST, "user@example.com", "secret")

        assert result.success is True
        assert result.sync.success is True
        assert result.sync.result.store_id == "store-1"
        assert result.sync.result.products_created == 2
        assert result.sync.result.variants_created == 2

        sync_requests = [r for r in backend.requests if r.url.host == "api.test"]
        assert len(sync_requests) == 1
        assert sync_requests[0].headers["authorization"] == "Bearer jwt"

        summary = read_json(tmp_path / "output" / "cool-gear-store.com.summary.json")
        assert summary["sync"]["store_id"] == "store-1"
        assert summary["sync"]["success"] is True

    @pytest.mark.asyncio
    async def test_authentication_failure_skips_sync(self, settings, fake_sleep):
        backend = FakeBackend(auth_ok=False)

        async with mock_client(backend) as client:
            async with ScrapePipeline(settings, client, fake_sleep) as pipeline:
                result = await pipeline.scrape_and_sync(STORE_HOST, "user@example.com", "bad")

        assert result.success is False
        assert result.error == "Authentication failed: Invalid login credentials"
        assert result.error_code == "AUTHENTICATION_ERROR"
        assert "api.test" not in backend.hosts()

    @pytest.mark.asyncio
    async def test_scrape_failure_skips_authentication(self, settings, fake_sleep):
        backend = FakeBackend(is_shopify=False)

        async with mock_client(backend) as client:
            async with ScrapePipeline(settings, client, fake_sleep) as pipeline:
                result = await pipeline.scrape_and_sync(STORE_HOST, "user@example.com", "secret")

        assert result.success is False
        assert "auth.test" not in backend.hosts()

    @pytest.mark.asyncio
    async def test_sync_failure(self, settings, fake_sleep):
        backend = FakeBackend(sync_ok=False)

        async with mock_client(backend) as client:
            async with ScrapePipeline(settings, client, fake_sleep) as pipeline:
                result = await pipeline.scrape_and_sync(STORE_HOST, "user@example.com", "secret")

        assert result.success is False
        assert result.error == "Sync failed: Sync completed with 1 error(s)"
        assert result.sync.result.errors == ["Batch 1/1: Store limit reached"]


class TestDeleteStore:
    @pytest.mark.asyncio
    async def test_delete(self, settings, backend, fake_sleep):
        async with mock_client(backend) as client:
            async with ScrapePipeline(settings, client, fake_sleep) as pipeline:
                result = await pipeline.delete_store("store-1", "user@example.com", "secret")

        assert result.success is True
        assert result.message == "Store store-1 deleted successfully"
        assert STORE_HOST not in backend.hosts()

    @pytest.mark.asyncio
    async def test_delete_requires_authentication(self, settings, fake_sleep):
        backend = FakeBackend(auth_ok=False)

        async with mock_client(backend) as client:
            async with ScrapePipeline(settings, client, fake_sleep) as pipeline:
                result = await pipeline.delete_store("store-1", "user@example.com", "bad")

        assert result.success is False
        assert result.message == "Authentication failed: Invalid login credentials"
        assert "api.test" not in backend.hosts()


def test_build_store_record_falls_back_to_nulls():
    store = build_store_record("shop.com", ShopInfo())

    assert store.display_name == "Shop"
    assert store.default_currency == "USD"
    assert store.supported_currencies == ["USD"]
    assert store.logo_url is None
    assert store.description is None
    assert store.shopify_connection_status == "scraped"
