"""Build command: build the cscope database of every workspace directory."""

from __future__ import annotations

import argparse

from scopehound.core.config.cscope_config import CscopeConfig

from .common import create_service


async def build_command(args: argparse.Namespace, config: CscopeConfig) -> None:
    service = create_service(args, config)
    report = await service.build()
    if args.verbose:
        print(f"$ {service.get_build_cmd()}")
    if report:
        print(report)
