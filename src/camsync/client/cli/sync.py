"""Sync command for camsync CLI.

Commands:
- sync: Mirror camera media to the output folder, once or on a schedule
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from camsync.client.cli.config import build_sync_config

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class ClickEchoHandler(logging.Handler):
    """Logging handler writing through click.echo to stderr.

    The stream is looked up on every record so output follows whatever
    stderr click currently targets.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def configure_logging(verbose: bool) -> None:
    """Send camsync log records to stderr.

    Args:
        verbose: Show debug messages when True, otherwise info and above.
    """
    handler = ClickEchoHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    camsync_logger = logging.getLogger("camsync")
    # Replace handlers so repeated invocations don't duplicate output
    for existing in camsync_logger.handlers[:]:
        camsync_logger.removeHandler(existing)
    camsync_logger.addHandler(handler)
    camsync_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    camsync_logger.propagate = False


@click.command()
@click.option("--host", default=None, help="Camera address (e.g., 192.168.0.1).")
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory to write media into.",
)
@click.option(
    "--mirror/--no-mirror",
    default=None,
    help="Copy companion files and keep the camera's directory layout.",
)
@click.option("--poll", is_flag=True, help="Keep polling the camera instead of syncing once.")
@click.option(
    "--poll-seconds",
    type=click.IntRange(min=0),
    default=None,
    help="Seconds between passes (0 syncs once). Implies --poll when non-zero.",
)
@click.option(
    "--delete-percent",
    type=click.IntRange(0, 100),
    default=None,
    help="Reserved: disk usage percentage at which old media would be deleted.",
)
@click.option("--timeout", type=float, default=None, help="HTTP timeout in seconds.")
@click.option("--path", "media_path", default="", help="Only list media under this camera path.")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
def sync(
    host: str | None,
    output_dir: Path | None,
    mirror: bool | None,
    poll: bool,
    poll_seconds: int | None,
    delete_percent: int | None,
    timeout: float | None,
    media_path: str,
    verbose: bool,
) -> None:
    """Mirror media from the camera into the output folder.

    Files already present with the same size as on the camera are skipped.
    Use --poll to keep syncing on a fixed interval.
    """
    from camsync.client.api import VirbClient
    from camsync.client.sync import (
        EnumerationError,
        FileFetcher,
        PollScheduler,
        SyncEngine,
        SyncResult,
    )

    configure_logging(verbose)

    try:
        config = build_sync_config(
            host=host,
            output_dir=output_dir,
            mirror=mirror,
            poll=poll,
            poll_seconds=poll_seconds,
            delete_percent=delete_percent,
            timeout=timeout,
            media_path=media_path,
        )
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    def display_summary(result: SyncResult) -> None:
        """Display sync results summary."""
        for fetched in result.downloaded:
            click.echo(f"  ↓ {fetched.local_path}")

        if result.errors:
            click.echo(click.style("\nErrors:", fg="red"))
            for error in result.errors:
                click.echo(f"  ✗ {error}")

        if not result.downloaded and not result.errors:
            click.echo("Everything is up to date.")
        else:
            click.echo(
                f"\nSync complete: {len(result.downloaded)} downloaded "
                f"({result.total_bytes} bytes), "
                f"{len(result.skipped)} up to date, "
                f"{len(result.errors)} errors"
            )

    click.echo(f"Syncing from {config.base_url}...")
    click.echo(f"Output folder: {config.output_dir}")
    if config.mirror:
        click.echo("Mirror mode: on")
    click.echo("")

    with VirbClient(config) as client, FileFetcher(timeout=config.timeout) as fetcher:
        engine = SyncEngine(config, client, fetcher)
        scheduler = PollScheduler(config, engine, on_pass=display_summary)

        if config.run_once:
            try:
                scheduler.run()
            except EnumerationError as e:
                click.echo(f"Error: {e}", err=True)
                sys.exit(1)
            return

        click.echo(f"Polling every {config.poll_seconds}s... (Ctrl+C to stop)\n")
        try:
            scheduler.run()
        except KeyboardInterrupt:
            click.echo("\nStopping...")
