"""
SEOmoz Command Line

Prints links, page authority and domain authority for one or more URLs.

Usage:
    # Set credentials first (or put them in .env):
    export SEOMOZ_ACCESS_ID=your_access_id
    export SEOMOZ_SECRET_KEY=your_secret_key

    seomoz https://example.com https://example.org
    seomoz --cols 103079217156 https://example.com
"""

import argparse
import asyncio
import logging
import sys
from typing import Dict, List, Optional

import httpx
from dotenv import load_dotenv
from pydantic import ValidationError

from .collector import MozClient
from .errors import MozAPIError
from .models import DEFAULT_COLS, URLMetrics
from .utils.config import Settings

logger = logging.getLogger(__name__)


async def fetch_metrics(
    urls: List[str],
    cols: int,
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[str, URLMetrics]:
    """Run one bulk query with a client configured from *settings*."""
    async with MozClient.from_env(settings, transport=transport) as client:
        return await client.get_bulk_url_metrics(urls, cols)


def format_metrics(metrics: URLMetrics) -> str:
    """One output line for a URL."""
    return (
        f"{metrics.url}\tLinks: {metrics.links:.0f}"
        f"\tPage Authority: {metrics.page_authority:.0f}"
        f"\tDomain Authority: {metrics.domain_authority:.0f}"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seomoz",
        description="Analyze URLs using SEOmoz",
    )
    parser.add_argument(
        "urls",
        nargs="+",
        metavar="URL",
        help="URLs to analyze"
    )
    parser.add_argument(
        "-c", "--cols",
        type=int,
        default=DEFAULT_COLS,
        help=f"SEOmoz column bitmask (default: {DEFAULT_COLS})"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    load_dotenv()
    try:
        settings = Settings()
    except ValidationError as e:
        print(f"ERROR: Invalid configuration: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    if not settings.has_credentials:
        print("ERROR: Missing SEOMOZ_ACCESS_ID or SEOMOZ_SECRET_KEY", file=sys.stderr)
        return 1

    try:
        results = asyncio.run(fetch_metrics(args.urls, args.cols, settings))
    except (MozAPIError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    for url in dict.fromkeys(args.urls):
        print(format_metrics(results[url]))
    return 0


if __name__ == "__main__":
    sys.exit(main())
