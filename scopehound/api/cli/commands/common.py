"""Service construction shared by CLI commands."""

from __future__ import annotations

import argparse
from pathlib import Path

from scopehound.core.config.cscope_config import CscopeConfig
from scopehound.providers.workspace import WorkspaceDirectories
from scopehound.services.cscope_service import CscopeService


def create_service(args: argparse.Namespace, config: CscopeConfig) -> CscopeService:
    directories = args.directories or [Path.cwd()]
    root = args.root or Path.cwd()
    return CscopeService(
        config=config,
        directories=WorkspaceDirectories(directories, current=root),
    )
