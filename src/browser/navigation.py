"""Page navigation and in-page timing collection.

This module provides the NavigationController class which drives a page to a
target URL under a deadline and reads the page's own performance timeline once
the load event has fired.
"""

from typing import Dict, Any
import logging
import math

from playwright.async_api import Page
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from src.browser.errors import NavigationError, NavigationTimeout
from src.models.browser_models import NavigationTiming

logger = logging.getLogger(__name__)


# Navigation Timing Level 2 with a fallback to the legacy performance.timing
# object. loadEventEnd can still be 0 right after the load event, in which
# case loadEventStart is used.
TIMING_SCRIPT = """
() => {
    const paint = performance.getEntriesByName('first-contentful-paint')[0];
    const nav = performance.getEntriesByType('navigation')[0];
    let domContentLoaded = 0;
    let load = 0;
    if (nav) {
        domContentLoaded = nav.domContentLoadedEventEnd - nav.startTime;
        load = (nav.loadEventEnd || nav.loadEventStart) - nav.startTime;
    } else if (performance.timing) {
        const t = performance.timing;
        domContentLoaded = t.domContentLoadedEventEnd - t.navigationStart;
        load = (t.loadEventEnd || t.loadEventStart) - t.navigationStart;
    }
    return {
        fcp: paint ? paint.startTime : 0,
        dom_content_loaded: domContentLoaded,
        load: load
    };
}
"""


class NavigationController:
    """Drive a page to its load event and read navigation timing.

    PATTERN: wait for the full ``load`` lifecycle event, not DOM ready.
    Load timing is only complete after it fires.
    """

    WAIT_UNTIL = "load"

    async def navigate(self, page: Page, url: str, timeout_ms: int) -> None:
        """Navigate to a URL and wait for its load event.

        Args:
            page: Playwright page instance
            url: Target URL
            timeout_ms: Deadline in milliseconds

        Raises:
            NavigationTimeout: If the deadline elapses first
            NavigationError: If navigation fails for any other reason
        """
        logger.info(f"Navigating to {url} (timeout={timeout_ms}ms)")
        try:
            await page.goto(url, wait_until=self.WAIT_UNTIL, timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            logger.warning(f"Navigation to {url} timed out after {timeout_ms}ms")
            raise NavigationTimeout(f"{url} exceeded {timeout_ms} ms", url=url) from e
        except PlaywrightError as e:
            logger.error(f"Navigation to {url} failed: {e.message}")
            raise NavigationError(e.message, url=url) from e
        except Exception as e:
            logger.error(f"Navigation to {url} failed: {e}")
            raise NavigationError(str(e), url=url) from e
        logger.debug(f"Load event fired for {url}")

    async def read_timing(self, page: Page) -> NavigationTiming:
        """Read FCP, DOMContentLoaded and load timing from the page.

        A missing first-contentful-paint entry is reported as 0.

        Args:
            page: Playwright page instance after a successful navigate()

        Returns:
            NavigationTiming for the current document

        Raises:
            NavigationError: If the timing query cannot run in the page
        """
        try:
            raw: Dict[str, Any] = await page.evaluate(TIMING_SCRIPT)
        except PlaywrightError as e:
            logger.error(f"Failed to read navigation timing: {e.message}")
            raise NavigationError(f"timing query failed: {e.message}") from e
        except Exception as e:
            logger.error(f"Failed to read navigation timing: {e}")
            raise NavigationError(f"timing query failed: {e}") from e

        timing = self.parse_timing(raw)
        logger.debug(f"Navigation timing collected: {timing}")
        return timing

    @staticmethod
    def parse_timing(raw: Dict[str, Any]) -> NavigationTiming:
        """Convert the raw timeline values into a NavigationTiming.

        Negative or missing values clamp to 0.

        Raises:
            NavigationError: If the query result is not an object
        """
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise NavigationError(
                f"timing query returned {type(raw).__name__}, expected an object"
            )

        def _non_negative(key: str) -> float:
            value = raw.get(key) or 0
            try:
                number = float(value)
            except (TypeError, ValueError):
                return 0.0
            return max(number, 0.0) if math.isfinite(number) else 0.0

        return NavigationTiming(
            first_contentful_paint_ms=_non_negative("fcp"),
            dom_content_loaded_ms=int(round(_non_negative("dom_content_loaded"))),
            load_ms=int(round(_non_negative("load"))),
        )
