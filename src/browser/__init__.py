"""Browser-driven page performance measurement.

This package provides the measurement core:
- Browser session lifecycle (one headless browser per request)
- Network response observation while a navigation is in flight
- Navigation under a deadline and in-page timing collection
- Reduction of responses and timing into a performance report
"""

from src.browser.browser_session import BrowserSession
from src.browser.response_tap import ResponseTap, TapHandle
from src.browser.navigation import NavigationController
from src.browser.metrics_reducer import reduce, format_report
from src.browser.errors import (
    PerformanceAnalysisError,
    LaunchError,
    PageCreateError,
    NavigationTimeout,
    NavigationError,
    ReadError,
)

__all__ = [
    "BrowserSession",
    "ResponseTap",
    "TapHandle",
    "NavigationController",
    "reduce",
    "format_report",
    "PerformanceAnalysisError",
    "LaunchError",
    "PageCreateError",
    "NavigationTimeout",
    "NavigationError",
    "ReadError",
]
