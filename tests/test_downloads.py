"""Tests for the image download service.

Validates that ImageDownloader writes the downloaded bytes to the exact path
it is given, never sends Figma credentials, and reports every failure
(missing URL, HTTP error, transport error, unwritable path) as False.
"""

import httpx
import pytest

from screenexport.downloads import ImageDownloader

IMAGE_URL = "https://cdn.example.com/render/1-2.png"
PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image-data"


def make_downloader(handler) -> ImageDownloader:
    return ImageDownloader(transport=httpx.MockTransport(handler))


class TestImageDownloader:
    """Tests for ImageDownloader.download."""

    @pytest.mark.asyncio
    async def test_download_writes_bytes(self, tmp_path):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, content=PNG_BYTES)

        target = tmp_path / "screen-Login.png"
        async with make_downloader(handler) as downloader:
            assert await downloader.download(IMAGE_URL, target) is True

        assert target.read_bytes() == PNG_BYTES
        assert str(requests[0].url) == IMAGE_URL
        assert "X-Figma-Token" not in requests[0].headers

    @pytest.mark.asyncio
    @pytest.mark.parametrize("url", [None, ""])
    async def test_missing_url_is_not_attempted(self, tmp_path, url):
        calls = []
        async with make_downloader(lambda request: calls.append(request)) as downloader:
            assert await downloader.download(url, tmp_path / "screen-Login.png") is False

        assert calls == []
        assert not (tmp_path / "screen-Login.png").exists()

    @pytest.mark.asyncio
    async def test_http_error_returns_false(self, tmp_path):
        target = tmp_path / "screen-Login.png"
        async with make_downloader(lambda request: httpx.Response(403, text="expired")) as downloader:
            assert await downloader.download(IMAGE_URL, target) is False
        assert not target.exists()

    @pytest.mark.asyncio
    async def test_transport_error_returns_false(self, tmp_path):
        def handler(request):
            raise httpx.ConnectError("connection reset", request=request)

        async with make_downloader(handler) as downloader:
            assert await downloader.download(IMAGE_URL, tmp_path / "screen-Login.png") is False

    @pytest.mark.asyncio
    async def test_write_error_returns_false(self, tmp_path, caplog):
        target = tmp_path / "missing-dir" / "screen-Login.png"
        async with make_downloader(lambda request: httpx.Response(200, content=PNG_BYTES)) as downloader:
            assert await downloader.download(IMAGE_URL, target) is False

        assert str(target) in caplog.text

    @pytest.mark.asyncio
    async def test_unwritable_path_returns_false(self, tmp_path):
        target = tmp_path / "screen-bad\x00name.png"
        async with make_downloader(lambda request: httpx.Response(200, content=PNG_BYTES)) as downloader:
            assert await downloader.download(IMAGE_URL, target) is False
