"""scopehound command-line entry point."""

from __future__ import annotations

import argparse
import asyncio
import os
import sys

from loguru import logger
from pydantic import ValidationError

from scopehound.core.config.cscope_config import CscopeConfig
from scopehound.version import __version__

from .parsers import add_build_subparser, add_query_subparser


def setup_logging(verbose: bool = False) -> None:
    """Send loguru output to stderr; DEBUG when verbose, warnings otherwise."""
    debug = verbose or os.getenv("SCOPEHOUND_DEBUG", "").lower() in ("true", "1", "yes")
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if debug else "WARNING")


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scopehound",
        description="Build and query cscope databases across workspace directories.",
    )
    parser.add_argument("--version", action="version", version=f"scopehound {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_build_subparser(subparsers)
    add_query_subparser(subparsers)
    return parser


async def async_main(args: argparse.Namespace, config: CscopeConfig) -> None:
    if args.command == "build":
        from .commands.build import build_command

        await build_command(args, config)
    elif args.command == "query":
        from .commands.query import query_command

        await query_command(args, config)


def main(argv: list[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = CscopeConfig.from_sources(args)
    except (ValidationError, ValueError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    try:
        asyncio.run(async_main(args, config))
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
