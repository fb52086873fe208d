"""Configure command for camsync CLI.

Commands:
- configure: Save default settings used by sync and list
"""

from __future__ import annotations

import json
from pathlib import Path

import click

from camsync.client.cli.config import get_config_file, load_config, save_config


@click.command()
@click.option("--host", default=None, help="Camera address.")
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory to write media into.",
)
@click.option("--mirror/--no-mirror", default=None, help="Default mirror mode.")
@click.option(
    "--poll-seconds",
    type=click.IntRange(min=1),
    default=None,
    help="Default interval used with 'sync --poll'.",
)
@click.option("--show", is_flag=True, help="Print the saved configuration and exit.")
def configure(
    host: str | None,
    output_dir: Path | None,
    mirror: bool | None,
    poll_seconds: int | None,
    show: bool,
) -> None:
    """Save default settings for camsync.

    Only the options given are changed; the rest keep their saved values.
    """
    config = load_config()

    if show:
        click.echo(f"Config file: {get_config_file()}")
        click.echo(json.dumps(config, indent=2) if config else "{}")
        return

    updates = {
        "host": host,
        "output_dir": str(output_dir.expanduser().resolve()) if output_dir else None,
        "mirror": mirror,
        "poll_seconds": poll_seconds,
    }
    changed = {k: v for k, v in updates.items() if v is not None}
    if not changed:
        click.echo("Nothing to change. Pass options to set, or --show to view.")
        return

    config.update(changed)
    save_config(config)
    for key, value in changed.items():
        click.echo(f"  {key} = {value}")
    click.echo(f"Saved to {get_config_file()}")
