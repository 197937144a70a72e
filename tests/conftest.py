"""
Shared fixtures for the catalog sync test suite
"""

import pytest

from catalog_sync.core.config.settings import (
    AuthSettings,
    LoggingSettings,
    ScraperSettings,
    Settings,
    SyncSettings,
)
from catalog_sync.shared.retry import RetryPolicy

from tests.helpers import API_URL, SUPABASE_URL, FakeSleep


@pytest.fixture
def fake_sleep():
    return FakeSleep()


@pytest.fixture
def scraper_settings():
    return ScraperSettings(
        RATE_LIMIT_DELAY_MS=2000,
        MAX_RETRIES=3,
        RETRY_BASE_DELAY_MS=1000,
        REQUEST_TIMEOUT_MS=5000,
        USER_AGENT="CatalogSyncTest/1.0",
        INVALID_VARIANT_POLICY="skip",
    )


@pytest.fixture
def sync_settings():
    return SyncSettings(CATALOG_API_URL=API_URL, SYNC_BATCH_SIZE=20)


@pytest.fixture
def auth_settings():
    return AuthSettings(SUPABASE_URL=SUPABASE_URL, SUPABASE_ANON_KEY="anon-key")


@pytest.fixture
def retry_policy(fake_sleep):
    return RetryPolicy(
        max_attempts=3,
        base_delay_ms=1000,
        rate_limit_delay_ms=2000,
        sleep_func=fake_sleep,
    )


@pytest.fixture
def settings(tmp_path, scraper_settings, sync_settings, auth_settings):
    return Settings(
        OUTPUT_DIR=str(tmp_path / "output"),
        SAVE_OUTPUT=True,
        scraper=scraper_settings,
        sync=sync_settings,
        auth=auth_settings,
        logging=LoggingSettings(LOG_LEVEL="INFO"),
    )
