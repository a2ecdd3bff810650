"""Indentation and separator strings for each layout mode."""

from __future__ import annotations

from enum import IntEnum, auto
from functools import lru_cache
from typing import TYPE_CHECKING

from wcwidth import wcswidth

if TYPE_CHECKING:
    from json_pretty_compact.config import FormatterConfig

COMMA = ","
PADDED_COMMA = ", "
PADDED_COLON = ": "


@lru_cache(4096)
def _wcswidth(s: str) -> int:
    return wcswidth(s)


class LayoutMode(IntEnum):
    """How a list or dict lays out its children."""

    SINGLE_LINE = auto()
    MULTI_LINE = auto()


class LayoutTracker:
    """Supplies indentation and separator strings.

    The result of every method depends only on the configuration and the
    arguments, so one tracker can be shared by independent renders.
    """

    def __init__(self: LayoutTracker, config: FormatterConfig) -> None:
        """Create a tracker for the given configuration."""
        self.config = config
        self.eol_str = config.eol
        self.indent_cache: dict[int, str] = {}

    def str_len(self: LayoutTracker, s: str) -> int:
        """Return string length supporting east-Asian characters."""
        if not self.config.east_asian_string_widths or s.isascii():
            return len(s)
        width = _wcswidth(s)
        # Non-printable characters have no defined width.
        return width if width >= 0 else len(s)

    def indent_for(self: LayoutTracker, depth: int) -> str:
        """Return the indent prefix for a line at ``depth``."""
        if depth not in self.indent_cache:
            self.indent_cache[depth] = self.config.indent_unit * depth
        return self.indent_cache[depth]

    def indent_width(self: LayoutTracker, depth: int) -> int:
        """Return the display width of the indent prefix at ``depth``."""
        return self.str_len(self.indent_for(depth))

    def separator_for(self: LayoutTracker, mode: LayoutMode) -> str:
        """Return the string between two children.

        In multi-line mode the caller appends the next line's indent.
        """
        if mode == LayoutMode.SINGLE_LINE:
            return PADDED_COMMA
        return COMMA + self.eol_str

    def pair_separator(self: LayoutTracker) -> str:
        """Return the key/value separator, the same in every layout."""
        return PADDED_COLON

    def opening(self: LayoutTracker, bracket: str, mode: LayoutMode) -> str:
        """Return an opening bracket followed by a space or a line ending."""
        if mode == LayoutMode.SINGLE_LINE:
            return bracket + " "
        return bracket + self.eol_str

    def closing(self: LayoutTracker, bracket: str, mode: LayoutMode, depth: int) -> str:
        """Return a closing bracket, on its own line at ``depth`` if expanded."""
        if mode == LayoutMode.SINGLE_LINE:
            return " " + bracket
        return self.eol_str + self.indent_for(depth) + bracket
