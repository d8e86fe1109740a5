"""Reduce an observed response log and navigation timing into a report."""

from typing import Any, Dict, Sequence

from src.models.browser_models import NavigationTiming, PerformanceReport, ResponseRecord


def reduce(
    log: Sequence[ResponseRecord], timing: NavigationTiming, url: str
) -> PerformanceReport:
    """Combine the response log and timing into a PerformanceReport.

    Pure and deterministic: the same inputs always give an equal report.

    Args:
        log: Response records observed during the navigation
        timing: Navigation timing read after the load event
        url: Measured page URL

    Returns:
        PerformanceReport with request count and page size in KB
    """
    total_bytes = sum(record.byte_size for record in log)
    return PerformanceReport(
        url=url,
        first_contentful_paint_ms=round(timing.first_contentful_paint_ms, 2),
        dom_content_loaded_ms=int(timing.dom_content_loaded_ms),
        load_ms=int(timing.load_ms),
        request_count=len(log),
        page_size_kb=round(total_bytes / 1024, 2),
    )


def format_report(report: PerformanceReport) -> Dict[str, Any]:
    """Render a report as the external JSON payload."""
    return {
        "url": report.url,
        "performance": {
            "FCP": f"{report.first_contentful_paint_ms:.2f} ms",
            "DOMContentLoaded": f"{report.dom_content_loaded_ms} ms",
            "LoadTime": f"{report.load_ms} ms",
            "Requests": report.request_count,
            "PageSizeKB": f"{report.page_size_kb:.2f} KB",
        },
    }
