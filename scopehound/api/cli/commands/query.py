"""Query command: run a cscope query across workspace directories."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.text import Text

from scopehound.core.config.cscope_config import CscopeConfig
from scopehound.core.models.item import Item

from .common import create_service


def _highlighted(item: Item) -> Text:
    text = Text(item.text or item.rest)
    if item.text and item.highlighted:
        text.stylize("bold yellow", item.column, item.end_column)
    return text


def render_items(
    items: list[Item], console: Console, root: Path | None = None
) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Folder", style="cyan", no_wrap=True)
    table.add_column("Location", style="green", overflow="fold")
    table.add_column("Symbol", style="magenta")
    table.add_column("Line")
    for item in items:
        table.add_row(item.label, item.location(root), item.symbol, _highlighted(item))
    console.print(table)
    console.print(f"{len(items)} result(s)")


async def query_command(args: argparse.Namespace, config: CscopeConfig) -> None:
    service = create_service(args, config)
    items = await service.query(args.kind, args.word)

    if getattr(args, "json", False):
        print(json.dumps([item.to_dict() for item in items], indent=2))
        return

    console = Console()
    if args.verbose:
        console.print(f"$ {service.get_query_cmd()}", markup=False)
    render_items(items, console, root=args.root or Path.cwd())
