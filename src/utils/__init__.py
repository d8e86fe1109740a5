"""Utility functions and helpers."""

from .url_utils import InvalidURLError, validate_url

__all__ = [
    "InvalidURLError",
    "validate_url",
]
