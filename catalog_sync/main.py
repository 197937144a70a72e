"""
Command line entry point

    scrape <domain> <email> <password> [logoUrl] [description]
    scrape delete <storeId> <email> <password>
"""

import argparse
import asyncio
import sys
from typing import List, Optional, Tuple

from catalog_sync.core.config import Settings, load_settings
from catalog_sync.core.exceptions import ConfigurationError
from catalog_sync.core.logging import LoggingConfig, get_logger, setup_logging
from catalog_sync.services.scrape_pipeline import PipelineResult, ScrapePipeline

logger = get_logger(__name__)

USAGE = """\
Usage:

Scrape and sync a Shopify store:
   scrape <domain> <email> <password> [logoUrl] [description]

Delete a store by ID:
   scrape delete <storeId> <email> <password>

Examples:
   scrape example-store.com user@example.com secret
   scrape example-store.com user@example.com secret "https://example.com/logo.png" "My Store"
   scrape delete 54b5de3c-45e0-475c-8bc9-a8d6025bacfb user@example.com secret
"""


class UsageArgumentParser(argparse.ArgumentParser):
    """Argument parser that prints the full usage text and exits with 1"""

    def print_usage(self, file=None):
        (file or sys.stderr).write(USAGE)

    def error(self, message):
        sys.stderr.write(f"error: {message}\n\n")
        self.print_usage()
        self.exit(1)


def build_parser() -> UsageArgumentParser:
    parser = UsageArgumentParser(
        prog="scrape",
        description="Scrape a Shopify storefront catalog and sync it to the catalog API",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def split_arguments(argv: List[str]) -> Tuple[List[str], List[str]]:
    """Separate leading options from the command arguments.

    Options are only recognized before the first positional (or up to "--"),
    so passwords and descriptions starting with "-" are passed through as is.
    """
    for index, arg in enumerate(argv):
        if arg == "--":
            return argv[:index], argv[index + 1 :]
        if not arg.startswith("-") or arg == "-":
            return argv[:index], argv[index:]
    return list(argv), []


def print_scrape_summary(result: PipelineResult) -> None:
    print("\n" + "=" * 60)
    print("SCRAPE RESULTS")
    print("=" * 60)
    print(f"Domain: {result.domain}")
    if result.data is not None:
        print(f"Products: {len(result.data.products)}")
        print(f"Variants: {len(result.data.product_variants)}")
    print(f"Pages: {result.total_pages}")
    print(f"Failed products: {len(result.failed_products)}")
    print(f"Failed variants: {len(result.failed_variants)}")
    if result.output_path:
        print(f"Output: {result.output_path}")

    if result.sync is not None and result.sync.result is not None:
        summary = result.sync.result
        print(f"Store ID: {summary.store_id}")
        print(f"Products created: {summary.products_created}")
        print(f"Variants created: {summary.variants_created}")
        if summary.errors:
            print(f"\nErrors ({len(summary.errors)}):")
            for error in summary.errors:
                print(f"  - {error}")


async def run_scrape(settings: Settings, arguments: List[str]) -> int:
    domain, email, password = arguments[:3]
    logo_url = arguments[3] if len(arguments) > 3 and arguments[3] else None
    description = arguments[4] if len(arguments) > 4 and arguments[4] else None

    async with ScrapePipeline(settings) as pipeline:
        result = await pipeline.scrape_and_sync(
            domain, email, password, logo_url, description
        )

    if result.data is not None:
        print_scrape_summary(result)

    if not result.success:
        logger.error("Run failed", error=result.error)
        return 1

    logger.info("Scraping and sync complete", domain=result.domain)
    return 0


async def run_delete(settings: Settings, arguments: List[str]) -> int:
    store_id, email, password = arguments[:3]

    async with ScrapePipeline(settings) as pipeline:
        result = await pipeline.delete_store(store_id, email, password)

    if not result.success:
        logger.error("Delete failed", error=result.message)
        return 1

    logger.info(result.message)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    options, arguments = split_arguments(
        list(sys.argv[1:] if argv is None else argv)
    )
    args = parser.parse_args(options)

    is_delete = bool(arguments) and arguments[0] == "delete"
    required = 4 if is_delete else 3
    if len(arguments) < required:
        parser.print_usage()
        return 1

    try:
        settings = load_settings()
    except ConfigurationError as e:
        sys.stderr.write(f"{e}\n")
        return 1

    logging_config = LoggingConfig.from_settings(settings.logging)
    if args.verbose:
        logging_config.level = "DEBUG"
        logging_config.console.level = "DEBUG"
    setup_logging(logging_config)

    if is_delete:
        return asyncio.run(run_delete(settings, arguments[1:]))
    return asyncio.run(run_scrape(settings, arguments))


def run() -> None:
    """Console script entry point"""
    try:
        code = main()
    except KeyboardInterrupt:
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    run()
