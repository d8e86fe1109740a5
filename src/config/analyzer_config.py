"""Page analyzer configuration with environment variable loading."""

import os
from pydantic import BaseModel, Field, ValidationInfo, field_validator
from dotenv import load_dotenv

from src.models.browser_models import BrowserType

# Load environment variables from .env file
load_dotenv()

DEFAULT_NAVIGATION_TIMEOUT_MS = 30000
DEFAULT_SETTLE_TIMEOUT_MS = 5000


class AnalyzerConfig(BaseModel):
    """Configuration for the page analyzer.

    Every component receives its configuration explicitly; nothing reads the
    environment after an instance has been built.
    """

    # Browser Configuration
    navigation_timeout_ms: int = Field(
        default_factory=lambda: int(
            os.getenv("PAGEPROBE_NAVIGATION_TIMEOUT_MS", str(DEFAULT_NAVIGATION_TIMEOUT_MS))
        ),
        description="Deadline for a page to reach its load event (ms)",
    )
    headless: bool = Field(
        default_factory=lambda: os.getenv("PAGEPROBE_HEADLESS", "true").lower() == "true",
        description="Run the browser without a window",
    )
    settle_timeout_ms: int = Field(
        default_factory=lambda: int(
            os.getenv("PAGEPROBE_SETTLE_TIMEOUT_MS", str(DEFAULT_SETTLE_TIMEOUT_MS))
        ),
        description="Budget for in-flight response body reads after the load event (ms)",
    )
    browser_type: BrowserType = Field(
        default_factory=lambda: BrowserType(os.getenv("PAGEPROBE_BROWSER", "chromium")),
        description="Browser engine to launch",
    )

    # HTML Fetch Configuration
    fetch_timeout_s: float = Field(
        default_factory=lambda: float(os.getenv("PAGEPROBE_FETCH_TIMEOUT_S", "15.0")),
        description="Timeout for the raw HTML fetch in seconds",
    )
    user_agent: str = Field(
        default_factory=lambda: os.getenv(
            "PAGEPROBE_USER_AGENT", "Mozilla/5.0 (compatible; pageprobe/0.1)"
        ),
        description="User-Agent header for the HTML fetch",
    )

    # API Server Configuration
    host: str = Field(
        default_factory=lambda: os.getenv("PAGEPROBE_HOST", "0.0.0.0"),
        description="API bind address",
    )
    port: int = Field(
        default_factory=lambda: int(os.getenv("PORT", "3000")),
        description="API port",
    )

    @field_validator("navigation_timeout_ms", "settle_timeout_ms")
    @classmethod
    def _positive_timeout(cls, value: int, info: ValidationInfo) -> int:
        if value <= 0:
            raise ValueError(f"{info.field_name} must be positive")
        return value

    @field_validator("fetch_timeout_s")
    @classmethod
    def _positive_fetch_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("fetch_timeout_s must be positive")
        return value

    def with_overrides(self, **overrides) -> "AnalyzerConfig":
        """Return a copy with the given non-None fields replaced."""
        updates = {k: v for k, v in overrides.items() if v is not None}
        if not updates:
            return self
        return AnalyzerConfig(**{**self.model_dump(), **updates})
