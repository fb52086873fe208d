"""Mapping of camera URLs to local destination paths.

In mirror mode the local layout follows the camera's own directory tree,
starting at the first known marker segment found in the URL. This keeps
files where the camera vendor's desktop tools expect them. Otherwise each
primary file is written directly under the output directory using its
logical name.
"""

from __future__ import annotations

import os
import posixpath
from pathlib import Path
from urllib.parse import urlsplit

# Checked in order; the first marker present in the URL wins.
DEFAULT_MARKERS: tuple[str, ...] = ("/DCIM/", "/GMetrix/")


def _clean_relative(path: str) -> str:
    """Normalize a relative path so it cannot climb above its root."""
    cleaned = posixpath.normpath("/" + path.replace("\\", "/"))
    return cleaned.lstrip("/")


def url_suffix(url: str, markers: tuple[str, ...] = DEFAULT_MARKERS) -> str:
    """Return the part of ``url`` worth keeping as a local relative path.

    Args:
        url: Remote URL (or anything resembling one).
        markers: Marker segments searched in order.

    Returns:
        The suffix starting at the first marker found, or the whole URL
        path when no marker is present.
    """
    for marker in markers:
        i = url.find(marker)
        if i >= 0:
            return url[i:]
    try:
        return urlsplit(url).path
    except ValueError:
        return url


class PathMapper:
    """Maps (name, url) pairs to paths under an output directory."""

    def __init__(
        self,
        output_dir: Path | str,
        markers: tuple[str, ...] = DEFAULT_MARKERS,
    ) -> None:
        """Initialize the mapper.

        Args:
            output_dir: Root directory for all mapped paths.
            markers: Marker segments used in mirror mode.
        """
        self._root = os.path.normpath(os.fspath(output_dir))
        self._markers = markers

    @property
    def output_dir(self) -> Path:
        """Get the root directory."""
        return Path(self._root)

    def map(self, name: str, url: str, mirror: bool) -> Path:
        """Map a media file to its local destination.

        Args:
            name: Logical file name reported by the camera.
            url: Remote URL of the file.
            mirror: Whether to mirror the camera's directory layout.

        Returns:
            Normalized destination path under the output directory.
        """
        relative = url_suffix(url, self._markers) if mirror else name
        relative = _clean_relative(relative)
        if not relative:
            return Path(self._root)
        return Path(os.path.normpath(os.path.join(self._root, relative)))
