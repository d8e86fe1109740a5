"""SEO/GEO scoring data models.

Models for the static-content half of a page report and for the combined
report returned by the page report service.
"""

from pydantic import BaseModel, Field
from typing import Dict, List, Any, Optional

from src.models.browser_models import AnalysisResult


class SEOReport(BaseModel):
    """Static-content heuristics computed from a page's HTML."""

    url: str = Field(description="Page URL")
    title: str = Field(default="", description="Text of the <title> element")
    meta_description: str = Field(default="", description="Meta description content")
    h1_count: int = Field(default=0, description="Number of <h1> elements")
    word_count: int = Field(default=0, description="Words in the body text")
    has_faq_schema: bool = Field(default=False, description="FAQPage JSON-LD present")

    seo_score: int = Field(default=50, ge=0, le=100, description="SEO score")
    geo_score: int = Field(default=50, ge=0, le=100, description="GEO score")

    seo_suggestions: List[str] = Field(
        default_factory=list, description="SEO improvements"
    )
    geo_suggestions: List[str] = Field(
        default_factory=list, description="Generative-engine improvements"
    )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "title": self.title,
            "metaDesc": self.meta_description,
            "h1Count": self.h1_count,
            "wordCount": self.word_count,
            "seoScore": self.seo_score,
            "geoScore": self.geo_score,
            "seoSuggestions": list(self.seo_suggestions),
            "geoSuggestions": list(self.geo_suggestions),
        }


class PageReport(BaseModel):
    """Combined SEO and performance report for one page."""

    url: str = Field(description="Page URL")
    seo: Optional[SEOReport] = Field(default=None, description="SEO/GEO half")
    seo_error: Optional[str] = Field(
        default=None, description="Why the SEO half is missing"
    )
    performance: Optional[AnalysisResult] = Field(
        default=None, description="Performance half"
    )

    def to_payload(self) -> Dict[str, Any]:
        """Render the combined payload.

        The SEO fields are flattened at the top level and the performance
        block is nested under ``performance``.
        """
        payload: Dict[str, Any] = {"url": self.url}
        if self.seo is not None:
            payload.update(self.seo.to_payload())
        elif self.seo_error:
            payload["seoError"] = self.seo_error

        if self.performance is not None:
            perf = self.performance.to_payload()
            payload["performance"] = perf.get("performance", perf)
        return payload
