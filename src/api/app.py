"""HTTP API for page analysis.

Routes:
    GET /analyze?url=      SEO/GEO scores plus the performance block
    GET /performance?url=  performance block only
    GET /health            liveness probe
"""

import logging
from typing import Optional

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.config.analyzer_config import AnalyzerConfig
from src.models.browser_models import FailureKind
from src.services.page_report_service import PageReportService
from src.utils.url_utils import InvalidURLError, validate_url

logger = logging.getLogger(__name__)

# Launch and page failures mean this service is unhealthy; navigation
# failures are about the target site.
FAILURE_STATUS = {
    FailureKind.LAUNCH_ERROR: 503,
    FailureKind.PAGE_CREATE_ERROR: 503,
    FailureKind.NAVIGATION_TIMEOUT: 502,
    FailureKind.NAVIGATION_ERROR: 502,
}


def create_app(
    config: Optional[AnalyzerConfig] = None,
    service: Optional[PageReportService] = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Analyzer configuration
        service: Page report service, built from the config when omitted

    Returns:
        Configured FastAPI app
    """
    config = config or AnalyzerConfig()
    app = FastAPI(title="pageprobe", version="0.1.0")
    app.state.config = config
    app.state.service = service or PageReportService(config)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.get("/performance")
    async def performance(
        request: Request,
        url: Optional[str] = Query(default=None),
        timeout_ms: Optional[int] = Query(default=None, gt=0),
    ):
        try:
            url = validate_url(url)
        except InvalidURLError as e:
            return JSONResponse({"error": str(e)}, status_code=400)

        result = await request.app.state.service.analyze_performance(
            url, timeout_ms=timeout_ms
        )
        if not result.ok:
            logger.warning(f"Performance request for {url} failed: {result.failure_kind}")
            return JSONResponse(
                result.to_payload(),
                status_code=FAILURE_STATUS.get(result.failure_kind, 500),
            )
        return result.to_payload()

    @app.get("/analyze")
    async def analyze(
        request: Request,
        url: Optional[str] = Query(default=None),
        timeout_ms: Optional[int] = Query(default=None, gt=0),
        performance: bool = Query(default=True),
    ):
        try:
            url = validate_url(url)
        except InvalidURLError as e:
            return JSONResponse({"error": str(e)}, status_code=400)

        report = await request.app.state.service.analyze(
            url,
            include_performance=performance,
            timeout_ms=timeout_ms,
        )
        if report.seo is None:
            return JSONResponse(
                {
                    "error": "Failed to fetch or analyze the website.",
                    "details": report.seo_error,
                },
                status_code=500,
            )
        return report.to_payload()

    return app
