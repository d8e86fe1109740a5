#!/usr/bin/env python
"""
pageprobe CLI entry point.

Usage:
    python cli.py analyze https://example.com             # SEO + performance
    python cli.py analyze https://example.com --no-seo    # Performance only
    python cli.py analyze https://example.com --timeout-ms 10000
    python cli.py serve --port 3000                       # HTTP API
"""

from src.cli.app import main

if __name__ == "__main__":
    main()
