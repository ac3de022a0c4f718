"""Pytest configuration and fixtures for the screenexport test suite.

This module provides shared configuration and fixtures used across the entire
test suite: builders for Figma document payloads, an export configuration
rooted in a temporary directory, a delay policy that records calls instead of
sleeping, and an httpx mock transport that plays the Figma API.

Path Setup:
    The src directory is added to sys.path to enable imports like:
    ``from screenexport.document import extract_screen_nodes``
"""

import logging
import sys
from pathlib import Path

import httpx
import pytest

src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from screenexport.api.views import ImageFormat  # noqa: E402
from screenexport.config import ExportConfig  # noqa: E402
from screenexport.scheduling import DelayPolicy  # noqa: E402

FILE_KEY = "FILE123"
TOKEN = "figd_test_token"


# ---------------------------------------------------------------------------
# Payload builders
# ---------------------------------------------------------------------------


def make_node(node_id, name=None, node_type="FRAME", width=None, height=None, children=None, **extra):
    """Build a node dict shaped like the Figma files endpoint returns it."""
    node = {"id": node_id, "name": name or node_id, "type": node_type}
    if width is not None and height is not None:
        node["absoluteBoundingBox"] = {"x": 0, "y": 0, "width": width, "height": height}
    node["children"] = children or []
    node.update(extra)
    return node


def make_file_payload(pages, name="Test File"):
    """Wrap pages in a files endpoint response envelope."""
    return {
        "name": name,
        "lastModified": "2024-01-01T00:00:00Z",
        "version": "1",
        "document": {"id": "0:0", "name": "Document", "type": "DOCUMENT", "children": pages},
    }


def make_page(*children, page_id="0:1", name="Page 1"):
    return make_node(page_id, name=name, node_type="CANVAS", children=list(children))


# ---------------------------------------------------------------------------
# Fake Figma API
# ---------------------------------------------------------------------------


class FakeFigmaAPI:
    """httpx MockTransport handler emulating the files, images and download endpoints.

    render_urls maps (node_id, format) to the URL the images endpoint returns;
    missing pairs render as null. downloads maps URL to the bytes served.
    """

    def __init__(self, file_payload=None, file_status=200, render_urls=None, downloads=None):
        self.file_payload = file_payload if file_payload is not None else make_file_payload([])
        self.file_status = file_status
        self.render_urls = render_urls or {}
        self.downloads = downloads or {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == f"/v1/files/{FILE_KEY}":
            if self.file_status != 200:
                return httpx.Response(self.file_status, json={"status": self.file_status, "err": "Not found"})
            return httpx.Response(200, json=self.file_payload)

        if path == f"/v1/images/{FILE_KEY}":
            node_id = request.url.params["ids"]
            image_format = request.url.params["format"]
            url = self.render_urls.get((node_id, image_format))
            return httpx.Response(200, json={"err": None, "images": {node_id: url}})

        url = str(request.url)
        if url in self.downloads:
            return httpx.Response(200, content=self.downloads[url])
        return httpx.Response(404, text="not found")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def requests_to(self, path_prefix: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.startswith(path_prefix)]


class RecordingDelayPolicy(DelayPolicy):
    """Delay policy that records waits instead of sleeping."""

    def __init__(self):
        self.calls: list[str] = []

    async def wait_after_failed_format(self) -> None:
        self.calls.append("format")

    async def wait_after_screen(self) -> None:
        self.calls.append("screen")


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging (e.g. through the CLI) after each test."""
    yield
    logger = logging.getLogger("screenexport")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture()
def output_dir(tmp_path):
    return tmp_path / "exports"


@pytest.fixture()
def export_config(output_dir):
    """Export configuration with no dimension filter and zero delays."""
    return ExportConfig(
        token=TOKEN,
        file_key=FILE_KEY,
        output_dir=output_dir,
        image_formats=(ImageFormat.PNG,),
        api_delay=0,
        format_delay=0,
    )


@pytest.fixture()
def delay_policy():
    return RecordingDelayPolicy()


@pytest.fixture()
def clean_env(monkeypatch, tmp_path):
    """Run with no Figma/screenexport variables and no .env file in the cwd."""
    for key in [
        "FIGMA_TOKEN",
        "FIGMA_FILE_ID",
        "FIGMA_API_URL",
        "SCREENEXPORT_OUTPUT_DIR",
        "SCREENEXPORT_IMAGE_FORMATS",
        "SCREENEXPORT_INCLUDE_DIMENSIONS",
        "SCREENEXPORT_API_DELAY_MS",
        "SCREENEXPORT_TARGET_WIDTH",
        "SCREENEXPORT_TARGET_HEIGHT",
        "SCREENEXPORT_LOGGING_LEVEL",
    ]:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch
