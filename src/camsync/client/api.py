"""HTTP client for the camera's media API.

This module provides:
- MediaDescriptor: One media item as reported by the camera
- VirbClient: HTTP client for the camera's JSON command endpoint
- MediaEnumerator: Protocol the sync engine consumes
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from camsync.core.config import SyncConfig

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base exception for API errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CameraUnreachableError(APIError):
    """The camera could not be contacted."""


class MalformedResponseError(APIError):
    """The camera answered with something that is not a media list."""


@dataclass(frozen=True)
class MediaDescriptor:
    """Media item metadata from the camera.

    Only ``name`` and the URL fields drive sync decisions. Every URL may be
    an empty string, meaning the camera did not report that file.
    """

    name: str
    url: str = ""
    fit_url: str = ""
    low_res_video_path: str = ""
    thumb_url: str = ""
    type: str = ""
    size: int | None = None
    date: str = ""
    media_id: str = ""

    @property
    def auxiliary_urls(self) -> tuple[str, ...]:
        """Get companion file URLs in a fixed order (fit, low-res, thumb)."""
        return (self.fit_url, self.low_res_video_path, self.thumb_url)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MediaDescriptor:
        """Create from API response dictionary."""
        size = data.get("size")
        try:
            size = int(size) if size is not None else None
        except (TypeError, ValueError):
            size = None
        return cls(
            name=str(data.get("name") or ""),
            url=str(data.get("url") or ""),
            fit_url=str(data.get("fitURL") or ""),
            low_res_video_path=str(data.get("lowResVideoPath") or ""),
            thumb_url=str(data.get("thumbUrl") or ""),
            type=str(data.get("type") or ""),
            size=size,
            date=str(data.get("date") or ""),
            media_id=str(data.get("id") or ""),
        )


class MediaEnumerator(Protocol):
    """Anything that can list the media currently on a camera."""

    def media_list(self, path: str = "") -> list[MediaDescriptor]:
        """Return the media the camera reports, in camera order."""
        ...


class VirbClient:
    """HTTP client for the camera's ``/virb`` command endpoint."""

    def __init__(self, config: SyncConfig) -> None:
        """Initialize the client.

        Args:
            config: Sync configuration holding host and timeout.
        """
        self._config = config
        self._client = httpx.Client(timeout=config.timeout)

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> VirbClient:
        """Context manager entry."""
        return self

    def __exit__(self, *args: object) -> None:
        """Context manager exit."""
        self.close()

    def _command(self, command: str, **params: Any) -> dict[str, Any]:
        """Send a JSON command and return the decoded reply.

        Raises:
            CameraUnreachableError: If the request could not be made.
            APIError: If the camera returned an HTTP error.
            MalformedResponseError: If the reply is not a JSON object.
        """
        payload: dict[str, Any] = {"command": command}
        payload.update({k: v for k, v in params.items() if v})

        try:
            response = self._client.post(self._config.api_url, json=payload)
        except httpx.RequestError as e:
            raise CameraUnreachableError(
                f"Cannot reach camera at {self._config.base_url}: {e}"
            ) from e

        if response.status_code >= 400:
            raise APIError(
                f"Camera returned HTTP {response.status_code} for {command}",
                response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"Camera returned invalid JSON for {command}: {e}"
            ) from e
        if not isinstance(data, dict):
            raise MalformedResponseError(f"Expected a JSON object for {command}")
        return data

    def media_list(self, path: str = "") -> list[MediaDescriptor]:
        """List media on the camera.

        Args:
            path: Optional path filter understood by the camera.

        Returns:
            Media descriptors in the order the camera reported them.

        Raises:
            APIError: If the listing could not be fetched or parsed.
        """
        data = self._command("mediaList", path=path)
        media = data.get("media")
        if not isinstance(media, list):
            raise MalformedResponseError("Media list response has no 'media' array")

        items = [MediaDescriptor.from_dict(m) for m in media if isinstance(m, dict)]
        logger.info(f"MediaList returned {len(items)} items")
        return items
