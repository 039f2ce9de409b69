"""Shared pytest fixtures for the directory client tests."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from adapters.directory_client import DirectoryClient
from core.config import AppSettings

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Handler) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture
def settings() -> AppSettings:
    """Settings isolated from any local or user .env file."""
    return AppSettings(_env_file=None)


@pytest.fixture
def make_client(settings: AppSettings) -> Callable[[Handler], tuple[DirectoryClient, RecordingTransport]]:
    """Build a DirectoryClient whose traffic is served by `handler`."""

    def _make(handler: Handler) -> tuple[DirectoryClient, RecordingTransport]:
        transport = RecordingTransport(handler)
        return DirectoryClient(settings, transport=transport), transport

    return _make
