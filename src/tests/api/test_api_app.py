"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, MagicMock

from src.api.app import create_app
from src.config.analyzer_config import AnalyzerConfig
from src.models.browser_models import (
    AnalysisResult,
    AnalysisState,
    FailureKind,
    PerformanceReport,
)
from src.models.seo_models import PageReport, SEOReport
from src.services.page_report_service import PageReportService

URL = "https://example.com/"


@pytest.fixture
def perf_ok():
    """Create a successful performance result."""
    return AnalysisResult(
        url=URL,
        state=AnalysisState.RELEASED,
        report=PerformanceReport(
            url=URL,
            first_contentful_paint_ms=0.0,
            dom_content_loaded_ms=50,
            load_ms=75,
            request_count=3,
            page_size_kb=6.0,
        ),
    )


@pytest.fixture
def service(perf_ok):
    """Create a mock page report service."""
    service = MagicMock(spec=PageReportService)
    service.analyze_performance = AsyncMock(return_value=perf_ok)
    service.analyze = AsyncMock(
        return_value=PageReport(
            url=URL,
            seo=SEOReport(url=URL, title="Home", seo_score=60, geo_score=50),
            performance=perf_ok,
        )
    )
    return service


@pytest.fixture
def client(service):
    """Create a test client around the app."""
    return TestClient(create_app(AnalyzerConfig(), service=service))


class TestHealth:
    """Tests for /health."""

    def test_health(self, client):
        """Test the liveness probe."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestPerformance:
    """Tests for /performance."""

    def test_success(self, client):
        """Test a successful measurement returns the performance payload."""
        response = client.get("/performance", params={"url": URL})

        assert response.status_code == 200
        assert response.json() == {
            "url": URL,
            "performance": {
                "FCP": "0.00 ms",
                "DOMContentLoaded": "50 ms",
                "LoadTime": "75 ms",
                "Requests": 3,
                "PageSizeKB": "6.00 KB",
            },
        }

    def test_missing_url(self, client, service):
        """Test a missing url is rejected before any analysis."""
        response = client.get("/performance")

        assert response.status_code == 400
        assert response.json() == {"error": "URL is required"}
        service.analyze_performance.assert_not_called()

    def test_relative_url(self, client):
        """Test a URL without scheme is rejected."""
        response = client.get("/performance", params={"url": "example.com"})

        assert response.status_code == 400
        assert "http" in response.json()["error"]

    @pytest.mark.parametrize(
        "kind, status",
        [
            (FailureKind.NAVIGATION_TIMEOUT, 502),
            (FailureKind.NAVIGATION_ERROR, 502),
            (FailureKind.LAUNCH_ERROR, 503),
            (FailureKind.PAGE_CREATE_ERROR, 503),
        ],
    )
    def test_failure(self, client, service, kind, status):
        """Test failures return only an error summary."""
        service.analyze_performance = AsyncMock(
            return_value=AnalysisResult(
                url=URL, state=AnalysisState.FAILED, failure_kind=kind, error="boom"
            )
        )

        response = client.get("/performance", params={"url": URL})

        assert response.status_code == status
        assert response.json() == {"error": "boom"}

    def test_timeout_param(self, client, service):
        """Test the timeout query parameter is forwarded."""
        client.get("/performance", params={"url": URL, "timeout_ms": 2500})

        service.analyze_performance.assert_called_once_with(URL, timeout_ms=2500)


class TestAnalyze:
    """Tests for /analyze."""

    def test_success(self, client):
        """Test the combined payload."""
        response = client.get("/analyze", params={"url": URL})

        body = response.json()
        assert response.status_code == 200
        assert body["title"] == "Home"
        assert body["seoScore"] == 60
        assert body["performance"]["Requests"] == 3

    def test_fetch_failure(self, client, service):
        """Test a failed HTML fetch returns 500 with details."""
        service.analyze = AsyncMock(
            return_value=PageReport(url=URL, seo_error="Connection refused")
        )

        response = client.get("/analyze", params={"url": URL})

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to fetch or analyze the website.",
            "details": "Connection refused",
        }

    def test_skip_performance(self, client, service):
        """Test performance=false is forwarded."""
        client.get("/analyze", params={"url": URL, "performance": "false"})

        service.analyze.assert_called_once_with(
            URL, include_performance=False, timeout_ms=None
        )

    def test_missing_url(self, client):
        """Test a missing url is rejected."""
        response = client.get("/analyze")

        assert response.status_code == 400
        assert response.json() == {"error": "URL is required"}
