"""Logging utilities for Mazebench.

Provides color-coded output to distinguish generation work, failures and
summaries, plus a colored maze preview for eyeballing benchmark sets.
"""

import os
from enum import Enum
from typing import Iterable, Optional, Sequence, Set, Tuple


class Color(Enum):
    """ANSI color codes for terminal output."""

    # Colors for operation types
    BLUE = "\033[94m"      # Deterministic operations (generation, oracle)
    RED = "\033[91m"       # Errors and skipped inputs
    GREEN = "\033[92m"     # Success/completion
    CYAN = "\033[96m"      # Info/metadata
    GRAY = "\033[90m"      # Maze walls
    WHITE = "\033[37m"     # Maze floor
    YELLOW = "\033[93m"    # Solution path

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
        Colorized text if MAZEBENCH_NO_COLOR is not set, otherwise plain text
    """
    if os.getenv("MAZEBENCH_NO_COLOR"):
        return text

    prefix = color.value
    if bold:
        prefix = Color.BOLD.value + prefix

    return f"{prefix}{text}{Color.RESET.value}"


def log_deterministic(message: str) -> None:
    """Log a deterministic operation (blue)."""
    print(colored(f"{EMOJI_DETERMINISTIC} {message}", Color.BLUE))


def log_error(message: str) -> None:
    """Log an error or skipped input (red)."""
    print(colored(f"{EMOJI_ERROR} {message}", Color.RED))


def log_success(message: str) -> None:
    """Log a success (green)."""
    print(colored(f"{EMOJI_SUCCESS} {message}", Color.GREEN))


def log_info(message: str) -> None:
    """Log metadata/info (cyan)."""
    print(colored(f"{EMOJI_INFO} {message}", Color.CYAN))


# Markers for operation types (color-blind accessible)
EMOJI_DETERMINISTIC = "[•]"  # Deterministic operation
EMOJI_ERROR = "[!]"          # Error/skip
EMOJI_SUCCESS = "[✓]"        # Success
EMOJI_INFO = "[i]"           # Information


_PREVIEW_GLYPHS = {
    "#": ("█", Color.GRAY),
    "S": ("S", Color.CYAN),
    "G": ("G", Color.GREEN),
}


def render_maze_preview(
    maze: Sequence[str],
    path: Optional[Iterable[Tuple[int, int]]] = None,
) -> str:
    """Render a serialized grid for humans.

    Walls become ``█`` and floor ``·``; cells on ``path`` (``(x, y)`` pairs)
    are drawn as ``*`` unless they hold the start or goal glyph.
    """
    on_path: Set[Tuple[int, int]] = set(path or ())
    lines = []
    for y, row in enumerate(maze):
        chars = []
        for x, glyph in enumerate(row):
            if glyph in _PREVIEW_GLYPHS:
                symbol, color = _PREVIEW_GLYPHS[glyph]
            elif (x, y) in on_path:
                symbol, color = "*", Color.YELLOW
            else:
                symbol, color = "·", Color.WHITE
            chars.append(colored(symbol, color))
        lines.append("".join(chars))
    return "\n".join(lines)
