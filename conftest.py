"""Shared pytest fixtures for browser-free tests."""

import asyncio
from typing import Callable, Dict, List
from unittest.mock import AsyncMock, MagicMock

import pytest
from playwright.async_api import Page


class FakeResponse:
    """Minimal stand-in for a Playwright Response."""

    def __init__(self, url: str, size: int = 0, status: int = 200, error: Exception = None, delay: float = 0.0):
        self.url = url
        self.status = status
        self._size = size
        self._error = error
        self._delay = delay

    async def body(self) -> bytes:
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._error is not None:
            raise self._error
        return b"x" * self._size


def make_fake_page():
    """Create a mock Page that records event listeners and can emit events."""
    page = MagicMock(spec=Page)
    listeners: Dict[str, List[Callable]] = {}

    def on(event, listener):
        listeners.setdefault(event, []).append(listener)

    def remove_listener(event, listener):
        listeners.get(event, []).remove(listener)

    def emit(event, *args):
        for listener in list(listeners.get(event, [])):
            listener(*args)

    page.on = MagicMock(side_effect=on)
    page.remove_listener = MagicMock(side_effect=remove_listener)
    page.goto = AsyncMock()
    page.evaluate = AsyncMock(
        return_value={"fcp": 120.456, "dom_content_loaded": 300.4, "load": 450.6}
    )
    page.close = AsyncMock()
    page.emit = emit
    page.listeners = listeners
    return page


@pytest.fixture
def make_response():
    """Factory for fake responses."""
    return FakeResponse


@pytest.fixture
def fake_page():
    """Create a mock Page that records event listeners and can emit events."""
    return make_fake_page()


@pytest.fixture
def page_factory():
    """Factory for independent mock pages."""
    return make_fake_page
