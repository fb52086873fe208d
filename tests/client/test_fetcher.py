"""Tests for size-checked file download."""

from collections.abc import Iterator
from pathlib import Path

import httpx
import pytest

from camsync.client.sync.fetcher import (
    PART_SUFFIX,
    FileFetcher,
    content_length,
    is_up_to_date,
)
from camsync.client.sync.types import FetchOutcome, TransferError

URL = "http://cam/DCIM/100VIRB/VID_0001.MP4"


def mock_fetcher(handler) -> FileFetcher:  # type: ignore[no-untyped-def]
    """Create a fetcher backed by an httpx MockTransport."""
    return FileFetcher(client=httpx.Client(transport=httpx.MockTransport(handler)))


class TestContentLength:
    """Tests for content_length helper."""

    def test_present(self) -> None:
        """Should parse a valid header."""
        response = httpx.Response(200, headers={"Content-Length": "10485760"})
        assert content_length(response) == 10485760

    def test_missing(self) -> None:
        """Should return None without a header."""
        assert content_length(httpx.Response(200)) is None

    @pytest.mark.parametrize("value", ["abc", "-5", ""])
    def test_invalid(self, value: str) -> None:
        """Should treat unparsable values as unknown."""
        response = httpx.Response(200, headers={"Content-Length": value})
        assert content_length(response) is None


class TestIsUpToDate:
    """Tests for is_up_to_date helper."""

    def test_matching_size(self, tmp_path: Path) -> None:
        """Should match when sizes are equal."""
        path = tmp_path / "a.jpg"
        path.write_bytes(b"12345")
        assert is_up_to_date(path, 5) is True

    def test_size_mismatch(self, tmp_path: Path) -> None:
        """Should not match when sizes differ."""
        path = tmp_path / "a.jpg"
        path.write_bytes(b"12345")
        assert is_up_to_date(path, 6) is False

    def test_missing_file(self, tmp_path: Path) -> None:
        """Should not match a missing file."""
        assert is_up_to_date(tmp_path / "missing.jpg", 0) is False

    def test_unknown_remote_size(self, tmp_path: Path) -> None:
        """Should never match an unknown remote size."""
        path = tmp_path / "a.jpg"
        path.write_bytes(b"")
        assert is_up_to_date(path, None) is False

    def test_directory(self, tmp_path: Path) -> None:
        """Should not treat a directory as an up to date file."""
        assert is_up_to_date(tmp_path, tmp_path.stat().st_size) is False


class TestFileFetcher:
    """Tests for FileFetcher."""

    @pytest.mark.parametrize(("url", "path"), [("", "/data/a.mp4"), (URL, "")])
    def test_empty_input_is_noop(self, url: str, path: str) -> None:
        """Should succeed without any request when an input is empty."""
        with FileFetcher() as fetcher:
            result = fetcher.fetch(url, path)
        assert result.outcome == FetchOutcome.NOOP

    def test_download_new_file(self, tmp_path: Path, httpx_mock) -> None:  # type: ignore[no-untyped-def]
        """Should create missing file with the advertised size."""
        body = b"x" * 5000
        httpx_mock.add_response(url=URL, content=body)
        local = tmp_path / "DCIM" / "100VIRB" / "VID_0001.MP4"

        with FileFetcher(chunk_size=1024) as fetcher:
            result = fetcher.fetch(URL, local)

        assert result.outcome == FetchOutcome.DOWNLOADED
        assert result.size == 5000
        assert local.read_bytes() == body
        assert not local.with_name(local.name + PART_SUFFIX).exists()

    def test_skip_matching_size(self, tmp_path: Path, httpx_mock) -> None:  # type: ignore[no-untyped-def]
        """Should leave a same-size local file untouched."""
        httpx_mock.add_response(url=URL, content=b"new!")
        local = tmp_path / "VID_0001.MP4"
        local.write_bytes(b"old!")

        with FileFetcher() as fetcher:
            result = fetcher.fetch(URL, local)

        assert result.outcome == FetchOutcome.SKIPPED
        assert local.read_bytes() == b"old!"

    def test_skip_large_file(self, tmp_path: Path, httpx_mock) -> None:  # type: ignore[no-untyped-def]
        """Should skip a 10 MiB file whose size matches Content-Length."""
        httpx_mock.add_response(url=URL, headers={"Content-Length": "10485760"})
        local = tmp_path / "VID_0001.MP4"
        with open(local, "wb") as f:
            f.truncate(10485760)
        mtime = local.stat().st_mtime_ns

        with FileFetcher() as fetcher:
            result = fetcher.fetch(URL, local)

        assert result.outcome == FetchOutcome.SKIPPED
        assert result.size == 10485760
        assert local.stat().st_size == 10485760
        assert local.stat().st_mtime_ns == mtime

    def test_redownload_on_size_mismatch(self, tmp_path: Path, httpx_mock) -> None:  # type: ignore[no-untyped-def]
        """Should overwrite a local file of the wrong size."""
        httpx_mock.add_response(url=URL, content=b"complete file")
        local = tmp_path / "VID_0001.MP4"
        local.write_bytes(b"trunc")

        with FileFetcher() as fetcher:
            result = fetcher.fetch(URL, local)

        assert result.outcome == FetchOutcome.DOWNLOADED
        assert local.read_bytes() == b"complete file"

    def test_unknown_size_forces_download(self, tmp_path: Path) -> None:
        """Should download when the server gives no Content-Length."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=iter([b"abc", b"def"]))

        local = tmp_path / "VID_0001.MP4"
        local.write_bytes(b"abcdef")

        with mock_fetcher(handler) as fetcher:
            result = fetcher.fetch(URL, local)

        assert result.outcome == FetchOutcome.DOWNLOADED
        assert local.read_bytes() == b"abcdef"

    def test_http_error(self, tmp_path: Path, httpx_mock) -> None:  # type: ignore[no-untyped-def]
        """Should raise TransferError on an error status and write nothing."""
        httpx_mock.add_response(url=URL, status_code=404)
        local = tmp_path / "VID_0001.MP4"

        with FileFetcher() as fetcher:
            with pytest.raises(TransferError) as exc_info:
                fetcher.fetch(URL, local)

        assert exc_info.value.url == URL
        assert exc_info.value.local_path == local
        assert not local.exists()

    def test_connection_error(self, tmp_path: Path, httpx_mock) -> None:  # type: ignore[no-untyped-def]
        """Should raise TransferError when the request cannot be made."""
        httpx_mock.add_exception(httpx.ConnectError("Connection refused"), url=URL)

        with FileFetcher() as fetcher:
            with pytest.raises(TransferError, match="Request failed"):
                fetcher.fetch(URL, tmp_path / "VID_0001.MP4")

    def test_mid_stream_failure_keeps_old_file(self, tmp_path: Path) -> None:
        """Should not leave a partial file behind when the stream breaks."""

        def broken_body() -> Iterator[bytes]:
            yield b"partial"
            raise httpx.ReadError("connection reset")

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200, headers={"Content-Length": "100"}, content=broken_body()
            )

        local = tmp_path / "VID_0001.MP4"
        local.write_bytes(b"previous copy")

        with mock_fetcher(handler) as fetcher:
            with pytest.raises(TransferError, match="Transfer failed"):
                fetcher.fetch(URL, local)

        assert local.read_bytes() == b"previous copy"
        assert not local.with_name(local.name + PART_SUFFIX).exists()

    def test_directory_creation_failure(self, tmp_path: Path, httpx_mock) -> None:  # type: ignore[no-untyped-def]
        """Should raise OSError when the destination directory can't be made."""
        httpx_mock.add_response(url=URL, content=b"data")
        blocker = tmp_path / "DCIM"
        blocker.write_text("not a directory")

        with FileFetcher() as fetcher:
            with pytest.raises(OSError):
                fetcher.fetch(URL, blocker / "100VIRB" / "VID_0001.MP4")

    @pytest.mark.parametrize("destination", ["", "."])
    def test_directory_destination_rejected(self, tmp_path: Path, destination: str) -> None:
        """Should refuse a directory destination without making a request."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, content=b"data")

        local = tmp_path / destination if destination else Path(".")

        with mock_fetcher(handler) as fetcher:
            with pytest.raises(TransferError, match="is a directory") as exc_info:
                fetcher.fetch(URL, local)

        assert requests == []
        assert exc_info.value.local_path == local
        assert not (tmp_path.parent / (tmp_path.name + PART_SUFFIX)).exists()

    def test_shared_client_not_closed(self) -> None:
        """Should leave a caller-provided client open."""
        client = httpx.Client()
        with FileFetcher(client=client):
            pass
        assert not client.is_closed
        client.close()
