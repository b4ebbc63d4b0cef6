"""Logging setup: Rich handler on stderr.

stdout carries MCP traffic and machine-readable reports, so log records
always go to stderr.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str = "WARNING") -> None:
    handler = RichHandler(
        console=Console(stderr=True),
        show_level=True,
        show_path=False,
        rich_tracebacks=True,
    )
    root = logging.getLogger("gitprobe")
    root.handlers = [handler]
    root.setLevel(level.upper())
    root.propagate = False
