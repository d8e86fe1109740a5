"""Tests for NavigationController."""

import pytest
from unittest.mock import AsyncMock
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from src.browser.errors import NavigationError, NavigationTimeout
from src.browser.navigation import NavigationController, TIMING_SCRIPT
from src.models.browser_models import FailureKind, NavigationTiming


@pytest.fixture
def controller():
    """Create a NavigationController instance."""
    return NavigationController()


class TestNavigate:
    """Tests for navigate()."""

    @pytest.mark.asyncio
    async def test_waits_for_load_event(self, controller, fake_page):
        """Test goto waits for the full load event with the given deadline."""
        await controller.navigate(fake_page, "https://example.com", 5000)

        fake_page.goto.assert_called_once_with(
            "https://example.com", wait_until="load", timeout=5000
        )

    @pytest.mark.asyncio
    async def test_timeout(self, controller, fake_page):
        """Test an elapsed deadline raises NavigationTimeout."""
        fake_page.goto = AsyncMock(
            side_effect=PlaywrightTimeoutError("Timeout 1ms exceeded.")
        )

        with pytest.raises(NavigationTimeout) as exc_info:
            await controller.navigate(fake_page, "https://slow.example.com", 1)

        assert exc_info.value.kind == FailureKind.NAVIGATION_TIMEOUT
        assert "1 ms" in exc_info.value.summary
        assert exc_info.value.url == "https://slow.example.com"

    @pytest.mark.asyncio
    async def test_navigation_error(self, controller, fake_page):
        """Test a DNS failure raises NavigationError with the message."""
        fake_page.goto = AsyncMock(
            side_effect=PlaywrightError("net::ERR_NAME_NOT_RESOLVED")
        )

        with pytest.raises(NavigationError) as exc_info:
            await controller.navigate(fake_page, "https://nope.invalid", 1000)

        assert exc_info.value.kind == FailureKind.NAVIGATION_ERROR
        assert "ERR_NAME_NOT_RESOLVED" in exc_info.value.summary

    @pytest.mark.asyncio
    async def test_timeout_is_not_generic_error(self, controller, fake_page):
        """Test timeouts are reported distinctly from other failures."""
        fake_page.goto = AsyncMock(side_effect=PlaywrightTimeoutError("Timeout"))

        with pytest.raises(NavigationTimeout):
            await controller.navigate(fake_page, "https://example.com", 1)

        assert not issubclass(NavigationTimeout, NavigationError)

    @pytest.mark.asyncio
    async def test_unexpected_error_wrapped(self, controller, fake_page):
        """Test non-Playwright failures still become NavigationError."""
        fake_page.goto = AsyncMock(side_effect=ConnectionResetError("reset"))

        with pytest.raises(NavigationError, match="reset"):
            await controller.navigate(fake_page, "https://example.com", 1000)


class TestReadTiming:
    """Tests for read_timing()."""

    @pytest.mark.asyncio
    async def test_reads_timeline(self, controller, fake_page):
        """Test timing values are read and converted."""
        timing = await controller.read_timing(fake_page)

        fake_page.evaluate.assert_called_once_with(TIMING_SCRIPT)
        assert timing == NavigationTiming(
            first_contentful_paint_ms=120.456,
            dom_content_loaded_ms=300,
            load_ms=451,
        )

    @pytest.mark.asyncio
    async def test_missing_fcp_is_zero(self, controller, fake_page):
        """Test a page that never painted reports FCP 0."""
        fake_page.evaluate = AsyncMock(
            return_value={"fcp": 0, "dom_content_loaded": 80, "load": 95}
        )

        timing = await controller.read_timing(fake_page)

        assert timing.first_contentful_paint_ms == 0.0
        assert timing.load_ms == 95

    @pytest.mark.asyncio
    async def test_query_failure(self, controller, fake_page):
        """Test a failing timing query raises NavigationError."""
        fake_page.evaluate = AsyncMock(
            side_effect=PlaywrightError("Execution context was destroyed")
        )

        with pytest.raises(NavigationError, match="timing query failed"):
            await controller.read_timing(fake_page)

    @pytest.mark.asyncio
    async def test_unexpected_query_failure(self, controller, fake_page):
        """Test a non-Playwright failure of the query is typed too."""
        fake_page.evaluate = AsyncMock(side_effect=RuntimeError("driver gone"))

        with pytest.raises(NavigationError, match="driver gone") as exc_info:
            await controller.read_timing(fake_page)

        assert isinstance(exc_info.value.__cause__, RuntimeError)


class TestParseTiming:
    """Tests for raw timing conversion."""

    def test_missing_keys(self):
        """Test missing values default to 0."""
        assert NavigationController.parse_timing({}) == NavigationTiming()
        assert NavigationController.parse_timing(None) == NavigationTiming()

    @pytest.mark.parametrize("raw", [["not", "a", "dict"], "timing", 42])
    def test_non_object_rejected(self, raw):
        """Test a query result that is not an object raises NavigationError."""
        with pytest.raises(NavigationError, match="expected an object"):
            NavigationController.parse_timing(raw)

    def test_infinite_values_clamped(self):
        """Test non-finite values become 0."""
        timing = NavigationController.parse_timing(
            {"fcp": float("inf"), "dom_content_loaded": float("nan"), "load": 7}
        )

        assert timing == NavigationTiming(load_ms=7)

    def test_negative_values_clamped(self):
        """Test negative values (unfinished events) clamp to 0."""
        timing = NavigationController.parse_timing(
            {"fcp": -1, "dom_content_loaded": -5.0, "load": -1000}
        )

        assert timing == NavigationTiming()

    def test_null_and_garbage(self):
        """Test null and non-numeric values become 0."""
        timing = NavigationController.parse_timing(
            {"fcp": None, "dom_content_loaded": "n/a", "load": 12.4}
        )

        assert timing.first_contentful_paint_ms == 0.0
        assert timing.dom_content_loaded_ms == 0
        assert timing.load_ms == 12

    def test_script_queries_paint_and_navigation(self):
        """Test the in-page query reads the paint and navigation entries."""
        assert "first-contentful-paint" in TIMING_SCRIPT
        assert "getEntriesByType('navigation')" in TIMING_SCRIPT
