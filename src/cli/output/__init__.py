"""CLI output rendering."""

from .renderer import OutputRenderer

__all__ = ["OutputRenderer"]
