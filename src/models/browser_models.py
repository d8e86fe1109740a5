"""Browser measurement data models for page performance analysis.

This module defines the Pydantic models produced and consumed by the
performance measurement core: observed network responses, in-page navigation
timing, the final performance report and the per-request analysis result.
"""

from pydantic import BaseModel, Field
from typing import Dict, Any, Optional
from enum import Enum
from datetime import datetime


class BrowserType(str, Enum):
    """Supported browser engines."""

    CHROMIUM = "chromium"
    FIREFOX = "firefox"
    WEBKIT = "webkit"


class FailureKind(str, Enum):
    """Fatal failure kinds of a performance analysis."""

    LAUNCH_ERROR = "launch_error"
    PAGE_CREATE_ERROR = "page_create_error"
    NAVIGATION_TIMEOUT = "navigation_timeout"
    NAVIGATION_ERROR = "navigation_error"


class AnalysisState(str, Enum):
    """Lifecycle states of a single performance analysis."""

    IDLE = "idle"
    SESSION_ACQUIRED = "session_acquired"
    PAGE_OPEN = "page_open"
    TAP_ATTACHED = "tap_attached"
    NAVIGATING = "navigating"
    COLLECTED = "collected"
    RELEASED = "released"
    FAILED = "failed"


class ResponseRecord(BaseModel):
    """One network response observed while the page loaded."""

    byte_size: int = Field(ge=0, description="Response body length in bytes")
    observed_at: float = Field(description="Monotonic timestamp of the body read")
    url: str = Field(default="", description="Response URL")
    status: int = Field(default=0, description="HTTP status code")

    class Config:
        """Pydantic configuration."""

        frozen = True


class NavigationTiming(BaseModel):
    """Timing read from the page's own performance timeline."""

    first_contentful_paint_ms: float = Field(
        default=0.0, ge=0.0, description="First Contentful Paint (ms), 0 if never fired"
    )
    dom_content_loaded_ms: int = Field(
        default=0, ge=0, description="DOMContentLoaded event end (ms)"
    )
    load_ms: int = Field(default=0, ge=0, description="Load event end (ms)")

    class Config:
        """Pydantic configuration."""

        frozen = True


class PerformanceReport(BaseModel):
    """Final metrics record of one page load."""

    url: str = Field(description="Page URL")
    first_contentful_paint_ms: float = Field(description="First Contentful Paint (ms)")
    dom_content_loaded_ms: int = Field(description="DOM Content Loaded (ms)")
    load_ms: int = Field(description="Load event end (ms)")
    request_count: int = Field(description="Responses with a readable body")
    page_size_kb: float = Field(description="Sum of response body sizes (KB)")

    class Config:
        """Pydantic configuration."""

        frozen = True


class AnalysisResult(BaseModel):
    """Outcome of one performance analysis: a report or a typed failure."""

    url: str = Field(description="Analyzed URL")
    state: AnalysisState = Field(description="Terminal state reached")
    report: Optional[PerformanceReport] = Field(
        default=None, description="Report on success"
    )
    failure_kind: Optional[FailureKind] = Field(
        default=None, description="Failure kind if failed"
    )
    error: Optional[str] = Field(default=None, description="Error summary if failed")
    dropped_responses: int = Field(
        default=0, description="Responses whose body could not be read"
    )
    duration_ms: float = Field(default=0.0, description="Wall time of the analysis")
    timestamp: datetime = Field(default_factory=datetime.now)

    @property
    def ok(self) -> bool:
        return self.report is not None

    def to_payload(self) -> Dict[str, Any]:
        """Render the externally visible payload.

        Returns:
            ``{"url", "performance"}`` on success, ``{"error"}`` otherwise
        """
        # Imported here to keep models free of browser package imports
        from src.browser.metrics_reducer import format_report

        if self.report is None:
            return {"error": self.error or "Performance analysis failed"}
        return format_report(self.report)
