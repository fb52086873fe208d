"""Size-checked file download.

This module provides:
- FileFetcher: Downloads a URL to a local path unless an up to date copy
  already exists

A local file counts as up to date when its size equals the Content-Length
the camera advertises. Nothing else is compared, so a corrupted file of
exactly the right size is never re-downloaded.
"""

from __future__ import annotations

import contextlib
import logging
import time
from pathlib import Path

import httpx

from camsync.client.sync.types import FetchOutcome, FetchResult, TransferError
from camsync.core.config import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024  # 1MB
PART_SUFFIX = ".part"


def content_length(response: httpx.Response) -> int | None:
    """Get the advertised body size of a response.

    Returns:
        Size in bytes, or None if the header is missing or invalid.
    """
    value = response.headers.get("Content-Length")
    if value is None:
        return None
    try:
        size = int(value)
    except ValueError:
        return None
    return size if size >= 0 else None


def is_up_to_date(local_path: Path, remote_size: int | None) -> bool:
    """Check whether a local file matches the remote size.

    An unknown remote size never matches.
    """
    if remote_size is None:
        return False
    try:
        return local_path.is_file() and local_path.stat().st_size == remote_size
    except OSError:
        return False


class FileFetcher:
    """Fetches remote files one at a time, streaming them to disk."""

    def __init__(
        self,
        client: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        chunk_size: int = CHUNK_SIZE,
    ) -> None:
        """Initialize the fetcher.

        Args:
            client: HTTP client to use. One is created when omitted.
            timeout: Request timeout in seconds for a created client.
            chunk_size: Bytes read from the network per write.
        """
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=timeout)
        self._chunk_size = chunk_size

    def close(self) -> None:
        """Close the HTTP client if this fetcher created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> FileFetcher:
        """Context manager entry."""
        return self

    def __exit__(self, *args: object) -> None:
        """Context manager exit."""
        self.close()

    def fetch(self, url: str, local_path: Path | str) -> FetchResult:
        """Download ``url`` into ``local_path`` if the local copy is stale.

        Args:
            url: Remote URL. Empty means nothing to fetch.
            local_path: Destination. Empty means nothing to fetch.

        Returns:
            FetchResult describing what happened.

        Raises:
            TransferError: If the destination is a directory, or the request
                or the transfer failed.
            OSError: If the destination directory could not be created.
        """
        if not url or not local_path:
            return FetchResult(url=url, local_path=None, outcome=FetchOutcome.NOOP)

        local_path = Path(local_path)
        if not local_path.name or local_path.is_dir():
            raise TransferError(
                f"Destination {local_path} is a directory, not a file",
                url=url,
                local_path=local_path,
            )
        logger.info(f"Fetching {url} into {local_path}")

        try:
            with self._client.stream("GET", url) as response:
                if response.status_code >= 400:
                    raise TransferError(
                        f"Server returned HTTP {response.status_code} for {url}",
                        url=url,
                        local_path=local_path,
                    )

                remote_size = content_length(response)
                logger.debug(f"Server says Content-Length of {remote_size}")

                local_path.parent.mkdir(parents=True, exist_ok=True)

                if is_up_to_date(local_path, remote_size):
                    logger.info(f"Skipping download; {local_path} is up to date")
                    return FetchResult(
                        url=url,
                        local_path=local_path,
                        outcome=FetchOutcome.SKIPPED,
                        size=remote_size,
                    )

                if local_path.exists():
                    logger.info(f"File size mismatch; re-downloading {local_path}")
                else:
                    logger.info(f"File missing locally; downloading {local_path}")

                return self._download(response, url, local_path)
        except httpx.HTTPError as e:
            raise TransferError(
                f"Request failed for {url}: {e}", url=url, local_path=local_path
            ) from e

    def _download(
        self, response: httpx.Response, url: str, local_path: Path
    ) -> FetchResult:
        """Stream a response body to disk.

        The body goes to a .part file next to the destination which is
        renamed into place once complete.
        """
        tmp_path = local_path.with_name(local_path.name + PART_SUFFIX)
        start = time.monotonic()
        size = 0

        try:
            with open(tmp_path, "wb") as f:
                for chunk in response.iter_bytes(chunk_size=self._chunk_size):
                    f.write(chunk)
                    size += len(chunk)
            tmp_path.replace(local_path)
        except (httpx.HTTPError, OSError) as e:
            with contextlib.suppress(OSError):
                tmp_path.unlink()
            logger.error(f"Copy failed for {url}: {e}")
            raise TransferError(
                f"Transfer failed for {url} after {size} bytes: {e}",
                url=url,
                local_path=local_path,
            ) from e

        elapsed = time.monotonic() - start
        rate = size / elapsed / 1000 if elapsed > 0 else 0.0
        logger.info(
            f"Copied {size} bytes into {local_path} in {elapsed:.1f} seconds "
            f"({rate:.1f} kB/sec)"
        )
        return FetchResult(
            url=url,
            local_path=local_path,
            outcome=FetchOutcome.DOWNLOADED,
            size=size,
            elapsed=elapsed,
        )
