"""
Tests for the command line entry point
"""

from unittest.mock import MagicMock, patch

import pytest

from catalog_sync import main as cli
from catalog_sync.core.exceptions import ConfigurationError
from catalog_sync.domains.catalog.services import DeleteResult
from catalog_sync.services.scrape_pipeline import PipelineResult


class FakePipeline:
    """Stands in for ScrapePipeline and records how it was called"""

    instances = []
    scrape_result = PipelineResult(success=True, domain="shop.com")
    delete_result = DeleteResult(success=True, message="Store s-1 deleted successfully")

    def __init__(self, settings):
        self.settings = settings
        self.calls = []
        FakePipeline.instances.append(self)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return None

    async def scrape_and_sync(self, *args):
        self.calls.append(("scrape_and_sync", args))
        return self.scrape_result

    async def delete_store(self, *args):
        self.calls.append(("delete_store", args))
        return self.delete_result


@pytest.fixture
def fake_pipeline(settings):
    FakePipeline.instances = []
    with patch.object(cli, "ScrapePipeline", FakePipeline), patch.object(
        cli, "load_settings", return_value=settings
    ), patch.object(cli, "setup_logging", MagicMock()) as setup_logging:
        yield setup_logging
    FakePipeline.scrape_result = PipelineResult(success=True, domain="shop.com")
    FakePipeline.delete_result = DeleteResult(
        success=True, message="Store s-1 deleted successfully"
    )


class TestUsage:
    """Test argument count checks"""

    @pytest.mark.parametrize(
        "argv",
        [
            [],
            ["shop.com"],
            ["shop.com", "user@example.com"],
            ["delete"],
            ["delete", "s-1", "user@example.com"],
        ],
    )
    def test_insufficient_arguments(self, argv, capsys, fake_pipeline):
        assert cli.main(argv) == 1
        assert "Usage:" in capsys.readouterr().err
        assert FakePipeline.instances == []

    def test_unknown_option_exits_with_one(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--bogus", "shop.com", "a", "b"])

        assert exc_info.value.code == 1
        assert "Usage:" in capsys.readouterr().err


class TestCommands:
    """Test dispatch to the pipeline"""

    def test_scrape(self, fake_pipeline):
        argv = ["shop.com", "user@example.com", "secret", "https://x.test/logo.png", "Desc"]

        assert cli.main(argv) == 0

        pipeline = FakePipeline.instances[0]
        assert pipeline.calls == [
            (
                "scrape_and_sync",
                ("shop.com", "user@example.com", "secret", "https://x.test/logo.png", "Desc"),
            )
        ]

    def test_optional_arguments_default_to_none(self, fake_pipeline):
        assert cli.main(["shop.com", "user@example.com", "secret"]) == 0

        _, args = FakePipeline.instances[0].calls[0]
        assert args[3:] == (None, None)

    def test_scrape_failure_exits_with_one(self, fake_pipeline):
        FakePipeline.scrape_result = PipelineResult(
            success=False, domain="shop.com", error="Detection failed: boom"
        )

        assert cli.main(["shop.com", "user@example.com", "secret"]) == 1

    def test_delete(self, fake_pipeline):
        assert cli.main(["delete", "s-1", "user@example.com", "secret"]) == 0

        assert FakePipeline.instances[0].calls == [
            ("delete_store", ("s-1", "user@example.com", "secret"))
        ]

    def test_delete_failure_exits_with_one(self, fake_pipeline):
        FakePipeline.delete_result = DeleteResult(success=False, message="Delete mutation failed")

        assert cli.main(["delete", "s-1", "user@example.com", "secret"]) == 1

    def test_verbose_enables_debug_logging(self, fake_pipeline):
        cli.main(["-v", "shop.com", "user@example.com", "secret"])

        logging_config = fake_pipeline.call_args.args[0]
        assert logging_config.level == "DEBUG"
        assert logging_config.console.level == "DEBUG"

    def test_password_starting_with_dash(self, fake_pipeline):
        assert cli.main(["shop.com", "user@example.com", "-secret"]) == 0

        _, args = FakePipeline.instances[0].calls[0]
        assert args[:3] == ("shop.com", "user@example.com", "-secret")

    def test_flag_like_password_is_not_an_option(self, fake_pipeline):
        assert cli.main(["shop.com", "user@example.com", "-v", "-", "--desc"]) == 0

        _, args = FakePipeline.instances[0].calls[0]
        assert args == ("shop.com", "user@example.com", "-v", "-", "--desc")
        assert fake_pipeline.call_args.args[0].level == "INFO"

    def test_double_dash_ends_options(self, fake_pipeline):
        assert cli.main(["-v", "--", "delete", "s-1", "user@example.com", "--x"]) == 0

        assert FakePipeline.instances[0].calls == [
            ("delete_store", ("s-1", "user@example.com", "--x"))
        ]

    def test_configuration_error(self, capsys):
        error = ConfigurationError("Configuration validation failed: 1 error(s)")

        with patch.object(cli, "load_settings", side_effect=error):
            assert cli.main(["shop.com", "user@example.com", "secret"]) == 1

        assert "Configuration validation failed" in capsys.readouterr().err
