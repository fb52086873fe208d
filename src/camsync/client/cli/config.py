"""Configuration utilities for camsync CLI.

This module provides shared configuration functions used across CLI commands.
Saved settings act as defaults; command-line options always win.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from camsync.core.config import DEFAULT_POLL_SECONDS, DEFAULT_TIMEOUT, SyncConfig


def get_config_dir() -> Path:
    """Get the configuration directory for camsync.

    Returns:
        Path to ~/.camsync or equivalent.
    """
    return Path.home() / ".camsync"


def get_config_file() -> Path:
    """Get the path to the config file."""
    return get_config_dir() / "config.json"


def load_config() -> dict[str, Any]:
    """Load configuration from config file."""
    config_file = get_config_file()
    if config_file.exists():
        return dict(json.loads(config_file.read_text()))
    return {}


def save_config(config: dict[str, Any]) -> None:
    """Save configuration to config file."""
    config_file = get_config_file()
    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(json.dumps(config, indent=2))


def get_output_dir(config: dict[str, Any]) -> Path:
    """Get the output folder path.

    Returns:
        Path to the output folder (configured or default ~/camsync).
    """
    if config.get("output_dir"):
        return Path(config["output_dir"]).expanduser().resolve()
    return Path.home() / "camsync"


def build_sync_config(
    host: str | None = None,
    output_dir: Path | None = None,
    mirror: bool | None = None,
    poll: bool = False,
    poll_seconds: int | None = None,
    delete_percent: int | None = None,
    timeout: float | None = None,
    media_path: str = "",
) -> SyncConfig:
    """Merge command-line options with saved settings.

    Options left as None fall back to the config file, then to defaults.
    Without ``poll`` or an explicit ``poll_seconds`` a single pass is run.

    Raises:
        ValueError: If no host is known or a value is out of range.
    """
    saved = load_config()

    host = host or saved.get("host")
    if not host:
        raise ValueError("No camera host given. Use --host or 'camsync configure'.")

    if poll_seconds is None:
        if poll:
            poll_seconds = int(saved.get("poll_seconds") or DEFAULT_POLL_SECONDS)
        else:
            poll_seconds = 0

    return SyncConfig(
        host=host,
        output_dir=output_dir.expanduser() if output_dir else get_output_dir(saved),
        mirror=bool(saved.get("mirror", False)) if mirror is None else mirror,
        poll_seconds=poll_seconds,
        delete_percent=(
            int(saved.get("delete_percent", 0)) if delete_percent is None else delete_percent
        ),
        timeout=float(saved.get("timeout", DEFAULT_TIMEOUT)) if timeout is None else timeout,
        media_path=media_path,
    )
