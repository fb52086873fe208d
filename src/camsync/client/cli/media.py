"""Media listing command for camsync CLI.

Commands:
- list: Show the media the camera currently reports
"""

from __future__ import annotations

import sys

import click

from camsync.client.cli.config import build_sync_config


@click.command("list")
@click.option("--host", default=None, help="Camera address (e.g., 192.168.0.1).")
@click.option("--path", "media_path", default="", help="Only list media under this camera path.")
@click.option("--urls", is_flag=True, help="Also show companion file URLs.")
def list_media(host: str | None, media_path: str, urls: bool) -> None:
    """List media on the camera without downloading anything."""
    from camsync.client.api import APIError, VirbClient

    try:
        config = build_sync_config(host=host, media_path=media_path)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    with VirbClient(config) as client:
        try:
            media_list = client.media_list(config.media_path)
        except APIError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

    if not media_list:
        click.echo("No media found.")
        return

    for media in media_list:
        size = f"{media.size:>12}" if media.size is not None else " " * 12
        click.echo(f"{size}  {media.name}  {media.url}")
        if urls:
            for label, url in (
                ("fit", media.fit_url),
                ("low-res", media.low_res_video_path),
                ("thumb", media.thumb_url),
            ):
                if url:
                    click.echo(f"{'':12}    {label}: {url}")

    click.echo(f"\n{len(media_list)} items")
