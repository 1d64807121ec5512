"""Shared test fixtures for Music Gateway tests."""

import os
import sys
from collections.abc import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app import create_app
from core.config import Config
from helpers import stream_response


class RecordingLogger:
    """RequestLogger that keeps every call for assertions."""

    def __init__(self):
        self.audio: list[tuple[str, str, str | None]] = []
        self.backend: list[tuple[str, str]] = []
        self.rejected: list[tuple[int, str]] = []
        self.errors: list[tuple[str, int, str]] = []

    def log_audio(self, url, method, *, byte_range=None):
        self.audio.append((url, method, byte_range))

    def log_backend(self, backend, url):
        self.backend.append((backend, url))

    def log_rejected(self, status, reason):
        self.rejected.append((status, reason))

    def log_error(self, route, status, message):
        self.errors.append((route, status, message))


class FakeUpstream:
    """Mock transport handler that records requests and replays a canned response."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.responder: Callable[[httpx.Request], httpx.Response] = lambda request: stream_response(
            200, json={"ok": True}
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no upstream request was made"
        return self.requests[-1]


@pytest.fixture
def config():
    """Default configuration."""
    return Config()


@pytest.fixture
def request_logger():
    return RecordingLogger()


@pytest.fixture
def upstream():
    """Fake upstream shared by every backend and the audio host."""
    return FakeUpstream()


@pytest.fixture
def client(config, request_logger, upstream):
    """Test client with the lifespan running against the fake upstream."""
    app = create_app(config, request_logger, transport=httpx.MockTransport(upstream))
    with TestClient(app) as test_client:
        yield test_client
