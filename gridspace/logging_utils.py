"""Logging utilities for gridspace.

Provides color-coded output to distinguish search traces, results and failures.
"""

import os
from enum import Enum


class Color(Enum):
    """ANSI color codes for terminal output."""

    # Colors for operation types (also the tints of render.illustrate)
    BLUE = "\033[94m"      # Search traces (wave expansion, frontier)
    YELLOW = "\033[93m"    # Recoveries (dead ends, retreats)
    RED = "\033[91m"       # Errors and failed searches
    GREEN = "\033[92m"     # Success/completion
    CYAN = "\033[96m"      # Info/metadata
    # Rendering only
    MAGENTA = "\033[95m"   # Expensive cells
    WHITE = "\033[97m"     # Route cells
    GRAY = "\033[90m"      # Cheapest cells

    # Formatting
    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Wrap text in ANSI color codes if colors are enabled.

    Args:
        text: Text to colorize
        color: Color to apply
        bold: Whether to make text bold

    Returns:
        Colorized text if GRIDSPACE_NO_COLOR is not set, otherwise plain text
    """
    if os.getenv("GRIDSPACE_NO_COLOR"):
        return text

    prefix = color.value
    if bold:
        prefix = Color.BOLD.value + prefix

    return f"{prefix}{text}{Color.RESET.value}"


def log_deterministic(message: str) -> None:
    """Log a search trace (blue)."""
    print(colored(message, Color.BLUE))


def log_recovery(message: str) -> None:
    """Log a dead-end recovery (yellow)."""
    print(colored(message, Color.YELLOW))


def log_error(message: str) -> None:
    """Log an error or failed search (red)."""
    print(colored(message, Color.RED))


def log_success(message: str) -> None:
    """Log a success (green)."""
    print(colored(message, Color.GREEN))


def log_info(message: str) -> None:
    """Log metadata/info (cyan)."""
    print(colored(message, Color.CYAN))


# Markers for operation types (color-blind accessible)
TAG_DETERMINISTIC = "[•]"  # Search step
TAG_RECOVERY = "[~]"       # Dead-end recovery
TAG_ERROR = "[!]"          # Error
TAG_SUCCESS = "[✓]"        # Success
TAG_INFO = "[i]"           # Information
