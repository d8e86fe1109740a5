"""Browser session lifecycle for one performance analysis.

This module provides the BrowserSession class which owns one headless browser
process for the duration of a single request. It handles launch, page
creation and unconditional teardown.

CRITICAL: release() must run on every exit path. It is idempotent and never
raises, so it is safe to call from finally blocks.
"""

from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)
from typing import Optional, List
import logging

from src.browser.errors import LaunchError, PageCreateError
from src.config.analyzer_config import AnalyzerConfig

logger = logging.getLogger(__name__)


class BrowserSession:
    """Own one browser process and the pages opened in it.

    A session is never shared between requests: a crashed or hung page can
    only take down the request that owns it.

    Example:
        async with await BrowserSession.acquire(config) as session:
            page = await session.new_page()
            await page.goto("https://example.com")
        # Browser process terminated
    """

    def __init__(self, config: Optional[AnalyzerConfig] = None):
        """Initialize an unlaunched session.

        Args:
            config: Analyzer configuration (browser type, headless flag,
                navigation timeout)
        """
        self.config = config or AnalyzerConfig()
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self._contexts: List[BrowserContext] = []
        self._released = False

    @classmethod
    async def acquire(cls, config: Optional[AnalyzerConfig] = None) -> "BrowserSession":
        """Create and launch a session.

        Args:
            config: Analyzer configuration

        Returns:
            Launched browser session

        Raises:
            LaunchError: If the browser process fails to start
        """
        session = cls(config)
        await session.start()
        return session

    async def __aenter__(self):
        """Async context manager entry."""
        if self.browser is None:
            await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.release()

    @property
    def released(self) -> bool:
        return self._released

    async def start(self) -> None:
        """Start Playwright and launch the browser process.

        Anything started before a failure is torn down again before the
        error propagates.

        Raises:
            LaunchError: If Playwright or the browser fails to start
        """
        if self.browser is not None:
            return
        if self._released:
            raise LaunchError("session already released")

        browser_type = self.config.browser_type.value
        try:
            self.playwright = await async_playwright().start()
            browser_launcher = getattr(self.playwright, browser_type)
            self.browser = await browser_launcher.launch(headless=self.config.headless)
            logger.info(f"Launched {browser_type} browser (headless={self.config.headless})")
        except Exception as e:
            logger.error(f"Failed to launch {browser_type} browser: {e}")
            await self._stop_playwright()
            raise LaunchError(str(e)) from e

    async def new_page(self) -> Page:
        """Create an isolated context and a page inside it.

        The page's default navigation timeout is set from the configuration.

        Returns:
            Page instance

        Raises:
            PageCreateError: If the context or page cannot be created
        """
        if self._released or self.browser is None:
            raise PageCreateError("browser session is not running")

        try:
            context = await self.browser.new_context()
            self._contexts.append(context)
            page = await context.new_page()
            page.set_default_navigation_timeout(self.config.navigation_timeout_ms)
            logger.debug(f"Created page in context_{id(context)}")
            return page
        except Exception as e:
            logger.error(f"Failed to create page: {e}")
            raise PageCreateError(str(e)) from e

    async def release(self) -> None:
        """Close every context, the browser and Playwright.

        Idempotent. Close failures are logged as non-fatal and never raised.
        """
        if self._released:
            return
        self._released = True

        for context in self._contexts:
            try:
                await context.close()
                logger.debug(f"Closed context: context_{id(context)}")
            except Exception as e:
                logger.warning(f"Error closing context: {e}")
        self._contexts.clear()

        if self.browser is not None:
            try:
                await self.browser.close()
                logger.debug(f"Closed browser: {self.config.browser_type.value}")
            except Exception as e:
                logger.warning(f"Error closing browser: {e}")
            self.browser = None

        await self._stop_playwright()
        logger.info("Browser session released")

    async def _stop_playwright(self) -> None:
        if self.playwright is None:
            return
        try:
            await self.playwright.stop()
        except Exception as e:
            logger.warning(f"Error stopping Playwright: {e}")
        self.playwright = None
