"""Query command argument parser for scopehound CLI."""

import argparse
from typing import Any, cast

from scopehound.core.types.query import QueryKind

from .common import add_common_arguments


def add_query_subparser(subparsers: Any) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "query",
        help="Query cscope databases",
        description="Run a cscope query in each workspace directory and list the matches.",
    )

    parser.add_argument(
        "kind",
        choices=[kind.value for kind in QueryKind],
        help="Query kind",
    )

    parser.add_argument(
        "word",
        help="Symbol, text or pattern to search for",
    )

    add_common_arguments(parser)

    parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON results",
    )

    return cast(argparse.ArgumentParser, parser)


__all__: list[str] = ["add_query_subparser"]
