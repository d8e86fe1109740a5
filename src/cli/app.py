"""Main CLI application entry point."""

import asyncio
import logging
import sys
from typing import Any, Dict, Optional, Tuple

import click

from ..config.analyzer_config import AnalyzerConfig
from ..services.page_report_service import PageReportService
from ..utils.url_utils import InvalidURLError, validate_url
from .output.renderer import OutputRenderer

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID = 2


def configure_logging(verbose: bool) -> None:
    """Configure root logging for CLI runs."""
    log_level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Suppress noisy loggers in non-verbose mode
    if not verbose:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)


@click.group()
def main() -> None:
    """
    pageprobe - single-page SEO/GEO and load performance analyzer.

    Analyze a page:
        pageprobe analyze https://example.com

    Performance only, 10 second deadline:
        pageprobe analyze https://example.com --no-seo --timeout-ms 10000

    Serve the HTTP API:
        pageprobe serve --port 3000
    """


@main.command()
@click.argument("url")
@click.option(
    "--timeout-ms",
    type=click.IntRange(min=1),
    help="Navigation deadline in milliseconds (default 30000)",
)
@click.option(
    "--seo/--no-seo",
    default=True,
    help="Run the SEO/GEO scoring",
)
@click.option(
    "--performance/--no-performance",
    default=True,
    help="Run the browser performance analysis",
)
@click.option(
    "--summary",
    is_flag=True,
    help="Print a summary table after the JSON",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose logging",
)
def analyze(
    url: str,
    timeout_ms: Optional[int],
    seo: bool,
    performance: bool,
    summary: bool,
    verbose: bool,
) -> None:
    """Analyze URL and print the JSON report."""
    configure_logging(verbose)
    renderer = OutputRenderer()

    try:
        url = validate_url(url)
    except InvalidURLError as e:
        renderer.render_error(str(e))
        sys.exit(EXIT_INVALID)

    if not seo and not performance:
        renderer.render_error("Nothing to do: both --no-seo and --no-performance given")
        sys.exit(EXIT_INVALID)

    config = AnalyzerConfig().with_overrides(navigation_timeout_ms=timeout_ms)

    try:
        payload, ok = asyncio.run(run_analysis(url, config, seo, performance))
    except KeyboardInterrupt:
        sys.exit(EXIT_FAILED)

    renderer.render_json(payload)
    if summary:
        renderer.render_summary(payload)
    sys.exit(EXIT_OK if ok else EXIT_FAILED)


async def run_analysis(
    url: str,
    config: AnalyzerConfig,
    include_seo: bool,
    include_performance: bool,
    service: Optional[PageReportService] = None,
) -> Tuple[Dict[str, Any], bool]:
    """
    Async analysis runner.

    Args:
        url: Validated URL
        config: Analyzer configuration
        include_seo: Run the SEO/GEO half
        include_performance: Run the performance half
        service: Page report service (built from config if omitted)

    Returns:
        Payload and whether every requested half succeeded
    """
    service = service or PageReportService(config)

    if not include_seo:
        result = await service.analyze_performance(url)
        return result.to_payload(), result.ok

    report = await service.analyze(url, include_performance=include_performance)
    if report.seo is None:
        return {
            "error": "Failed to fetch or analyze the website.",
            "details": report.seo_error,
        }, False

    ok = report.performance is None or report.performance.ok
    return report.to_payload(), ok


@main.command()
@click.option("--host", help="Bind address (default from PAGEPROBE_HOST)")
@click.option("--port", type=int, help="Port (default from PORT)")
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose logging",
)
def serve(host: Optional[str], port: Optional[int], verbose: bool) -> None:
    """Serve the HTTP API with uvicorn."""
    import uvicorn

    from ..api.app import create_app

    configure_logging(verbose)
    config = AnalyzerConfig().with_overrides(host=host, port=port)
    app = create_app(config)
    click.echo(f"pageprobe API running at http://{config.host}:{config.port}")
    uvicorn.run(app, host=config.host, port=config.port)
