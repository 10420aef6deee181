"""Arguments shared by every scopehound command."""

import argparse
from pathlib import Path

from scopehound.core.config.cscope_config import CscopeConfig


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "directories",
        nargs="*",
        type=Path,
        help="Workspace directories (default: current directory)",
    )
    parser.add_argument(
        "--root",
        type=Path,
        help="Reference root used to label results (default: current directory)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show diagnostic logging, including cscope output",
    )
    CscopeConfig.add_cli_arguments(parser)
