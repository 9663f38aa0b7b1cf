"""Command-line interface for urltomarkdown."""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console

from . import __version__
from .logging_config import setup_logging
from .models.config import NetworkConfig, ServiceConfig
from .models.options import ConversionOptions
from .service import UrlToMarkdown


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="urltomarkdown",
        description="Convert web pages to markdown",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert one page
  urltomarkdown https://example.com/article

  # Inline the page title and drop link destinations
  urltomarkdown https://example.com/article --title --no-links

  # Convert several pages into one document
  urltomarkdown https://example.com/a https://example.com/b
        """,
    )

    parser.add_argument(
        "urls",
        nargs="+",
        metavar="URL",
        help="URL(s) to convert; more than one produces a batch document",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    # Conversion options
    options_group = parser.add_argument_group("conversion options")
    options_group.add_argument(
        "--title",
        action="store_true",
        help="Inline the page title as a heading",
    )
    options_group.add_argument(
        "--no-links",
        action="store_true",
        help="Render link text without destinations",
    )
    options_group.add_argument(
        "--no-clean",
        action="store_true",
        help="Keep navigation and other boilerplate",
    )

    # Network and config
    config_group = parser.add_argument_group("configuration")
    config_group.add_argument(
        "--config",
        type=Path,
        default=None,
        metavar="FILE",
        help="YAML configuration file",
    )
    config_group.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Fetch deadline in seconds (default: 15)",
    )

    # Output control
    output_group = parser.add_argument_group("output control")
    output_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    output_group.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only print markdown",
    )

    return parser


def build_config(args: argparse.Namespace) -> ServiceConfig:
    """Merge the config file, environment and command-line flags."""
    config = ServiceConfig.from_yaml_file(args.config) if args.config else ServiceConfig.from_env()

    updates: dict = {}
    if args.timeout is not None:
        # model_copy() does not validate; the flag must still satisfy timeout > 0
        updates["network"] = NetworkConfig.model_validate({**config.network.model_dump(), "timeout": args.timeout})
    if args.verbose:
        updates["log_level"] = "DEBUG"
    elif args.quiet:
        updates["log_level"] = "ERROR"
    return config.model_copy(update=updates) if updates else config


def run(args: argparse.Namespace) -> int:
    """Run a conversion with the given arguments."""
    console = Console(stderr=True)

    try:
        config = build_config(args)
    except Exception as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        return 1

    setup_logging(config.log_level, str(config.log_file) if config.log_file else None)

    options = ConversionOptions(
        inline_title=args.title,
        ignore_links=args.no_links,
        improve_readability=not args.no_clean,
    )

    async def convert() -> int:
        async with UrlToMarkdown(config) as service:
            if len(args.urls) == 1:
                outcome = await service.convert_url(args.urls[0], options)
            else:
                outcome = await service.convert_batch(args.urls, options)

        if not outcome.ok:
            console.print(f"[red]Error {outcome.status_code}:[/red] {outcome.body}")
            return 1

        sys.stdout.write(outcome.body)
        if not args.quiet and outcome.title:
            console.print(f"[green]Converted:[/green] {outcome.title}")
        return 0

    return asyncio.run(convert())


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
