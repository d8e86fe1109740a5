"""Combined page report service.

This module provides the PageReportService facade which runs the static
SEO/GEO scoring pipeline and the browser performance analysis for one URL and
merges both halves into a PageReport.

PATTERN: Facade - one call, two independent analyses run concurrently
"""

import asyncio
import logging
from typing import Optional

from src.config.analyzer_config import AnalyzerConfig
from src.models.browser_models import AnalysisResult
from src.models.seo_models import PageReport, SEOReport
from src.seo.fetcher import HTMLFetcher
from src.seo.rules import score_page
from src.services.performance_service import PerformanceAnalyzer

logger = logging.getLogger(__name__)


class PageReportService:
    """Produce the combined SEO + performance report of a page.

    Example:
        service = PageReportService(AnalyzerConfig())
        report = await service.analyze("https://example.com")
        print(report.to_payload())
    """

    def __init__(
        self,
        config: Optional[AnalyzerConfig] = None,
        fetcher: Optional[HTMLFetcher] = None,
        performance_analyzer: Optional[PerformanceAnalyzer] = None,
    ):
        """Initialize the service.

        Args:
            config: Analyzer configuration shared by both halves
            fetcher: HTML fetcher for the SEO half
            performance_analyzer: Analyzer for the performance half
        """
        self.config = config or AnalyzerConfig()
        self.fetcher = fetcher or HTMLFetcher(self.config)
        self.performance_analyzer = performance_analyzer or PerformanceAnalyzer(self.config)

    async def score(self, url: str) -> SEOReport:
        """Fetch and score a page.

        Raises:
            FetchError: If the HTML cannot be fetched
        """
        html = await self.fetcher.fetch(url)
        return score_page(url, html)

    async def analyze(
        self,
        url: str,
        include_seo: bool = True,
        include_performance: bool = True,
        timeout_ms: Optional[int] = None,
    ) -> PageReport:
        """Analyze a page.

        A failing half is reported in its own field; the other half is still
        returned.

        Args:
            url: Absolute URL
            include_seo: Run the SEO/GEO scoring
            include_performance: Run the browser performance analysis
            timeout_ms: Navigation deadline override

        Returns:
            PageReport with the requested halves
        """
        logger.info(
            f"Analyzing {url} (seo={include_seo}, performance={include_performance})"
        )

        async def _skip():
            return None

        seo_task = self.score(url) if include_seo else _skip()
        perf_task = (
            self.performance_analyzer.analyze(url, timeout_ms=timeout_ms)
            if include_performance
            else _skip()
        )
        seo_result, perf_result = await asyncio.gather(
            seo_task, perf_task, return_exceptions=True
        )

        report = PageReport(url=url)

        if isinstance(seo_result, BaseException):
            if not isinstance(seo_result, Exception):
                raise seo_result
            logger.warning(f"SEO scoring failed for {url}: {seo_result}")
            report.seo_error = str(seo_result)
        else:
            report.seo = seo_result

        if isinstance(perf_result, BaseException):
            raise perf_result
        report.performance = perf_result

        return report

    async def analyze_performance(
        self, url: str, timeout_ms: Optional[int] = None
    ) -> AnalysisResult:
        """Run only the performance analysis."""
        return await self.performance_analyzer.analyze(url, timeout_ms=timeout_ms)
