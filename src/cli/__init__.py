"""
pageprobe CLI - command-line interface.

Commands:
- analyze: SEO/GEO scoring plus browser performance of one page
- serve: run the HTTP API
"""

from .app import main
from .output import OutputRenderer

__all__ = [
    "main",
    "OutputRenderer",
]
