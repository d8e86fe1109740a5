"""URL validation helpers for the HTTP and CLI entry points."""

from typing import Optional
from urllib.parse import urlparse


class InvalidURLError(ValueError):
    """The URL is missing, relative or not http(s)."""


def validate_url(url: Optional[str]) -> str:
    """
    Check that a URL is absolute http(s) with a host.

    Args:
        url: Candidate URL

    Returns:
        The URL with surrounding whitespace removed

    Raises:
        InvalidURLError: If the URL cannot be analyzed
    """
    if not url or not url.strip():
        raise InvalidURLError("URL is required")

    url = url.strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise InvalidURLError(f"URL must use http or https: {url}")
    if not parsed.netloc:
        raise InvalidURLError(f"URL must include a host: {url}")
    return url
