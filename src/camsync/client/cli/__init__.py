"""Command-line interface for camsync.

This module provides the main CLI entry point and assembles all commands.

Commands:
- sync: Mirror camera media to the output folder
- list: List media on the camera
- configure: Save default settings
"""

from __future__ import annotations

import click

from camsync.client.cli.config import (
    build_sync_config,
    get_config_dir,
    get_config_file,
    get_output_dir,
    load_config,
    save_config,
)
from camsync.client.cli.configure import configure
from camsync.client.cli.media import list_media
from camsync.client.cli.sync import sync


@click.group()
@click.version_option(package_name="camsync")
def cli() -> None:
    """camsync - Mirror media from a Wi-Fi camera to local storage."""


cli.add_command(sync)
cli.add_command(list_media)
cli.add_command(configure)


def main() -> None:
    """Entry point for the CLI."""
    cli()


__all__ = [
    "cli",
    "main",
    "build_sync_config",
    "get_config_dir",
    "get_config_file",
    "get_output_dir",
    "load_config",
    "save_config",
]
