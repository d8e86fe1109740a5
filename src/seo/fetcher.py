"""Raw HTML fetching for static-content scoring."""

import logging
from typing import Optional

import httpx

from src.config.analyzer_config import AnalyzerConfig

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """The page HTML could not be fetched."""


class HTMLFetcher:
    """Fetch a page's HTML over plain HTTP.

    PATTERN: HTTP-based fetching with async httpx. Redirects are followed and
    non-2xx responses are errors.
    """

    def __init__(
        self,
        config: Optional[AnalyzerConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the fetcher.

        Args:
            config: Analyzer configuration (timeout, User-Agent)
            transport: Optional httpx transport, used by tests
        """
        self.config = config or AnalyzerConfig()
        self._transport = transport

    async def fetch(self, url: str) -> str:
        """Fetch the HTML of a URL.

        Args:
            url: Absolute URL

        Returns:
            Decoded response body

        Raises:
            FetchError: On timeout, connection failure or error status
        """
        headers = {"User-Agent": self.config.user_agent}
        try:
            async with httpx.AsyncClient(
                timeout=self.config.fetch_timeout_s,
                headers=headers,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.error(f"Timed out fetching {url}: {e}")
            raise FetchError(f"Timed out fetching {url}") from e
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP {e.response.status_code} fetching {url}")
            raise FetchError(
                f"{url} responded with status {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Error fetching {url}: {e}")
            raise FetchError(str(e) or f"Could not fetch {url}") from e

        logger.debug(f"Fetched {len(response.content)} bytes from {url}")
        return response.text
