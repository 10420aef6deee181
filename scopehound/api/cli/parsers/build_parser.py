"""Build command argument parser for scopehound CLI."""

import argparse
from typing import Any, cast

from .common import add_common_arguments


def add_build_subparser(subparsers: Any) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "build",
        help="Build cscope databases",
        description=(
            "Build the cscope database in each workspace directory, one "
            "directory at a time, and print one result line per directory."
        ),
    )
    add_common_arguments(parser)
    return cast(argparse.ArgumentParser, parser)


__all__: list[str] = ["add_build_subparser"]
