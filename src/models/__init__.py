"""Models package for page analysis."""

from .browser_models import (
    BrowserType,
    FailureKind,
    AnalysisState,
    ResponseRecord,
    NavigationTiming,
    PerformanceReport,
    AnalysisResult,
)
from .seo_models import SEOReport, PageReport

__all__ = [
    # Performance models
    "BrowserType",
    "FailureKind",
    "AnalysisState",
    "ResponseRecord",
    "NavigationTiming",
    "PerformanceReport",
    "AnalysisResult",
    # SEO models
    "SEOReport",
    "PageReport",
]
