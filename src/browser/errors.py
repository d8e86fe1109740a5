"""Error taxonomy of the performance measurement core."""

from typing import Dict, Optional, Type

from src.models.browser_models import FailureKind


class PerformanceAnalysisError(Exception):
    """Fatal failure of one performance analysis.

    Attributes:
        kind: Failure kind reported to the caller
        summary: Human-readable description for payloads
    """

    kind: FailureKind = FailureKind.NAVIGATION_ERROR
    default_summary = "Performance analysis failed"

    def __init__(self, message: str = "", url: str = "", summary: Optional[str] = None):
        self.url = url
        if summary is None:
            summary = f"{self.default_summary}: {message}" if message else self.default_summary
        self.summary = summary
        super().__init__(self.summary)


class LaunchError(PerformanceAnalysisError):
    """The browser process failed to start."""

    kind = FailureKind.LAUNCH_ERROR
    default_summary = "Browser launch failed"


class PageCreateError(PerformanceAnalysisError):
    """The browser is running but a page context could not be created."""

    kind = FailureKind.PAGE_CREATE_ERROR
    default_summary = "Page creation failed"


class NavigationTimeout(PerformanceAnalysisError):
    """The page did not reach its load event before the deadline."""

    kind = FailureKind.NAVIGATION_TIMEOUT
    default_summary = "Navigation timed out"


class NavigationError(PerformanceAnalysisError):
    """Navigation failed (DNS, connection refused, protocol error)."""

    kind = FailureKind.NAVIGATION_ERROR
    default_summary = "Navigation failed"


class ReadError(Exception):
    """A single response body could not be read.

    Recovered inside the response tap and never surfaced to callers.
    """


ERRORS_BY_KIND: Dict[FailureKind, Type[PerformanceAnalysisError]] = {
    FailureKind.LAUNCH_ERROR: LaunchError,
    FailureKind.PAGE_CREATE_ERROR: PageCreateError,
    FailureKind.NAVIGATION_TIMEOUT: NavigationTimeout,
    FailureKind.NAVIGATION_ERROR: NavigationError,
}


def error_for_kind(
    kind: Optional[FailureKind], summary: Optional[str] = None, url: str = ""
) -> PerformanceAnalysisError:
    """Build the exception matching a reported failure kind."""
    error_class = ERRORS_BY_KIND.get(kind, PerformanceAnalysisError)
    return error_class(url=url, summary=summary)
