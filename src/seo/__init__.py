"""Static-content SEO/GEO scoring."""

from src.seo.fetcher import HTMLFetcher, FetchError
from src.seo.rules import score_page

__all__ = ["HTMLFetcher", "FetchError", "score_page"]
