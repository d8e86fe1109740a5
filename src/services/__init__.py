"""Services package for page analysis."""

from .performance_service import PerformanceAnalyzer
from .page_report_service import PageReportService

__all__ = [
    "PerformanceAnalyzer",
    "PageReportService",
]
