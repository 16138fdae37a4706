"""Pytest fixtures for tests."""

import json
import re
from pathlib import Path
from tempfile import TemporaryDirectory

import httpx
import pytest

from ledmapper.devices import WledDevice

CONTROLLER_HOST = "10.0.0.5"

_UPLOADED_MAP = re.compile(rb'\{"map":\[[^\]]*\]\}')


def make_cfg(total: int = 5, rev=(1, 0)) -> dict:
    """Build a minimal /cfg.json payload."""
    cfg = {
        "hw": {
            "led": {
                "total": total,
                "ins": [{"start": 0, "len": total, "order": 0, "rev": False, "pin": [2]}],
            }
        },
        "id": {"name": "WLED"},
    }
    if rev is not None:
        cfg["rev"] = list(rev)
    return cfg


class FakeController:
    """In-process WLED controller served through httpx.MockTransport."""

    def __init__(self, total: int = 5, ledmap: list[int] | None = None):
        self.cfg = make_cfg(total)
        self.ledmap_payload = {"map": ledmap} if ledmap is not None else None
        self.config_status = 200
        self.upload_status = 200
        self.highlight_status = 200
        self.requests: list[httpx.Request] = []
        self.uploads: list[list[int]] = []
        self.highlights: list[dict] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.method == "GET" and path == "/cfg.json":
            if self.config_status != 200:
                return httpx.Response(self.config_status)
            return httpx.Response(200, json=self.cfg)

        if request.method == "GET" and path == "/edit":
            if self.ledmap_payload is None:
                return httpx.Response(404, text="File not found")
            return httpx.Response(200, json=self.ledmap_payload)

        if request.method == "POST" and path == "/edit":
            if self.upload_status != 200:
                return httpx.Response(self.upload_status)
            match = _UPLOADED_MAP.search(request.content)
            uploaded = json.loads(match.group(0))["map"]
            self.uploads.append(uploaded)
            self.ledmap_payload = {"map": uploaded}
            return httpx.Response(200)

        if request.method == "POST" and path == "/json/si":
            self.highlights.append(json.loads(request.content))
            return httpx.Response(self.highlight_status, json={"success": True})

        return httpx.Response(404)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def requests_to(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def controller():
    """Controller with 5 pixels and no stored map."""
    return FakeController(total=5)


@pytest.fixture
def mapped_controller():
    """Controller with 5 pixels and a stored map."""
    return FakeController(total=5, ledmap=[4, 0, 1, 2, 3])


@pytest.fixture
def make_device():
    """Factory for WledDevice instances bound to a FakeController."""
    def _make(fake: FakeController, **kwargs) -> WledDevice:
        return WledDevice(CONTROLLER_HOST, transport=fake.transport, **kwargs)
    return _make


@pytest.fixture
def cfg():
    """Builder for /cfg.json payloads."""
    return make_cfg
