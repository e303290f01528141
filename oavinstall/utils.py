"""Utility functions for oavinstall."""

from __future__ import annotations

import logging
from typing import Literal

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

console = Console()
logger = logging.getLogger("oavinstall")

_VERBOSE = False

_STYLES = {
    "info": ("🔍", "blue"),
    "success": ("✅", "green"),
    "warning": ("⚠️", "yellow"),
    "error": ("❌", "bold red"),
    "debug": ("🐞", "dim"),
}


def setup_logging(verbose: bool = False) -> None:  # noqa: FBT001, FBT002
    """Configure logging level based on verbosity."""
    global _VERBOSE  # noqa: PLW0603
    _VERBOSE = verbose
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=console, show_path=False))


def log(
    message: str,
    level: Literal["info", "success", "warning", "error", "debug"] = "info",
    print_exception: bool = False,  # noqa: FBT001, FBT002
) -> None:
    """Print a styled message to the console."""
    if level == "debug" and not _VERBOSE:
        return
    emoji, style = _STYLES[level]
    console.print(f"{emoji} [{style}]{escape(message)}[/{style}]")
    if print_exception:
        console.print_exception()
