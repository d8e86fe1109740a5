"""Page performance analysis orchestrator.

This module provides the PerformanceAnalyzer class which sequences one
measurement: acquire a browser session, open a page, attach the response tap,
navigate, collect timing and responses, reduce them into a report and release
the session.

PATTERN: one session per request, no state shared between requests
CRITICAL: the session is released exactly once on every exit path
"""

import logging
import time
from typing import Callable, Dict, Optional, Type

from src.browser.browser_session import BrowserSession
from src.browser.errors import (
    LaunchError,
    NavigationError,
    PageCreateError,
    PerformanceAnalysisError,
    error_for_kind,
)
from src.browser.metrics_reducer import reduce
from src.browser.navigation import NavigationController
from src.browser.response_tap import ResponseTap, TapHandle
from src.config.analyzer_config import AnalyzerConfig
from src.models.browser_models import AnalysisResult, AnalysisState, PerformanceReport

logger = logging.getLogger(__name__)

SessionFactory = Callable[[AnalyzerConfig], BrowserSession]

# Failure kind for errors that escape a step without being typed, keyed by the
# state the request was in when the step started.
UNEXPECTED_ERRORS_BY_STATE: Dict[AnalysisState, Type[PerformanceAnalysisError]] = {
    AnalysisState.IDLE: LaunchError,
    AnalysisState.SESSION_ACQUIRED: PageCreateError,
    AnalysisState.PAGE_OPEN: PageCreateError,
}


class PerformanceAnalyzer:
    """Measure the load performance of a single page.

    States per request:
        idle -> session_acquired -> page_open -> tap_attached -> navigating
        -> collected -> released, or failed from any step. Release of the
        browser session follows both terminal paths.

    The analyzer keeps no per-request state, so concurrent ``analyze()``
    calls on one instance are independent of each other.

    Example:
        analyzer = PerformanceAnalyzer(AnalyzerConfig(navigation_timeout_ms=10000))
        result = await analyzer.analyze("https://example.com")
        if result.ok:
            print(result.report.page_size_kb)
    """

    def __init__(
        self,
        config: Optional[AnalyzerConfig] = None,
        session_factory: Optional[SessionFactory] = None,
        tap: Optional[ResponseTap] = None,
        navigator: Optional[NavigationController] = None,
    ):
        """Initialize the analyzer.

        Args:
            config: Analyzer configuration
            session_factory: Builds an unlaunched session from the config
            tap: Response tap
            navigator: Navigation controller
        """
        self.config = config or AnalyzerConfig()
        self.session_factory = session_factory or BrowserSession
        self.tap = tap or ResponseTap()
        self.navigator = navigator or NavigationController()

    async def analyze(self, url: str, timeout_ms: Optional[int] = None) -> AnalysisResult:
        """Run one measurement and return a report or a typed failure.

        Args:
            url: Absolute URL, already validated by the caller
            timeout_ms: Navigation deadline override

        Returns:
            AnalysisResult in state ``released`` with a report, or in state
            ``failed`` with the failure kind and summary

        Raises:
            ValueError: If an explicit timeout_ms is not positive
        """
        if timeout_ms is None:
            timeout_ms = self.config.navigation_timeout_ms
        elif timeout_ms <= 0:
            raise ValueError(f"timeout_ms must be positive, got {timeout_ms}")
        started = time.perf_counter()
        state = AnalysisState.IDLE
        session = self.session_factory(self.config)
        handle: Optional[TapHandle] = None
        report: Optional[PerformanceReport] = None
        failure: Optional[PerformanceAnalysisError] = None

        logger.info(f"Starting performance analysis of {url}")

        try:
            await session.start()
            state = self._transition(url, state, AnalysisState.SESSION_ACQUIRED)

            page = await session.new_page()
            state = self._transition(url, state, AnalysisState.PAGE_OPEN)

            handle = self.tap.attach(page)
            state = self._transition(url, state, AnalysisState.TAP_ATTACHED)

            state = self._transition(url, state, AnalysisState.NAVIGATING)
            await self.navigator.navigate(page, url, timeout_ms)
            timing = await self.navigator.read_timing(page)

            await self.tap.settle(handle, timeout_s=self.config.settle_timeout_ms / 1000)
            log = self.tap.snapshot(handle)
            report = reduce(log, timing, url)
            state = self._transition(url, state, AnalysisState.COLLECTED)

        except PerformanceAnalysisError as e:
            failure = e
            logger.error(
                f"Performance analysis of {url} failed in state {state.value}: "
                f"[{e.kind.value}] {e.summary}"
            )

        except Exception as e:
            failure = self._unexpected_failure(state, url, e)
            logger.error(
                f"Performance analysis of {url} failed in state {state.value}: "
                f"[{failure.kind.value}] {failure.summary}",
                exc_info=True,
            )

        finally:
            dropped = 0
            if handle is not None:
                dropped = handle.dropped
                self.tap.detach(handle)
            await session.release()

        duration_ms = (time.perf_counter() - started) * 1000

        if failure is not None:
            self._transition(url, state, AnalysisState.FAILED)
            return AnalysisResult(
                url=url,
                state=AnalysisState.FAILED,
                failure_kind=failure.kind,
                error=failure.summary,
                dropped_responses=dropped,
                duration_ms=duration_ms,
            )

        state = self._transition(url, state, AnalysisState.RELEASED)
        logger.info(
            f"Performance analysis of {url} complete: "
            f"FCP={report.first_contentful_paint_ms:.2f}ms, "
            f"Load={report.load_ms}ms, "
            f"Requests={report.request_count} ({dropped} dropped), "
            f"Size={report.page_size_kb:.2f}KB"
        )
        return AnalysisResult(
            url=url,
            state=state,
            report=report,
            dropped_responses=dropped,
            duration_ms=duration_ms,
        )

    async def measure(self, url: str, timeout_ms: Optional[int] = None) -> PerformanceReport:
        """Run one measurement and return the report.

        Raises:
            PerformanceAnalysisError: The typed failure of the request
        """
        result = await self.analyze(url, timeout_ms)
        if result.report is None:
            raise error_for_kind(result.failure_kind, summary=result.error, url=url)
        return result.report

    @staticmethod
    def _unexpected_failure(
        state: AnalysisState, url: str, error: Exception
    ) -> PerformanceAnalysisError:
        """Type an error no component classified, by the step it escaped from."""
        error_class = UNEXPECTED_ERRORS_BY_STATE.get(state, NavigationError)
        failure = error_class(str(error) or type(error).__name__, url=url)
        failure.__cause__ = error
        return failure

    @staticmethod
    def _transition(url: str, current: AnalysisState, target: AnalysisState) -> AnalysisState:
        logger.debug(f"{url}: {current.value} -> {target.value}")
        return target
