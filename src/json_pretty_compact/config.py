"""Formatter configuration."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum, auto

from json_pretty_compact.errors import ConfigurationError

DEFAULT_MAX_WIDTH = 80
DEFAULT_INDENT = "  "


class EolStyle(IntEnum):
    """End of line style enumeration."""

    CRLF = auto()
    LF = auto()


@dataclass(frozen=True)
class FormatterConfig:
    """Immutable settings shared by every render that uses them.

    Properties:

    max_width:
        Maximum line length in characters. A list or dict is written on a single
        line if the line it starts on, including indentation and any leading
        property name, stays within this width. ``None`` disables compaction, so
        that every non-empty list or dict is expanded.

    indent_unit:
        String written once per nesting level.

    eol_style:
        Dictates what sort of line endings to use.

    ensure_ascii:
        If True (the default), the output is guaranteed to have all incoming
        non-ASCII characters escaped.

    east_asian_string_widths:
        If True, measure line widths with wcwidth rather than simple string lengths.
    """

    max_width: int | None = DEFAULT_MAX_WIDTH
    indent_unit: str = DEFAULT_INDENT
    eol_style: EolStyle = EolStyle.LF
    ensure_ascii: bool = True
    east_asian_string_widths: bool = False

    def __post_init__(self: FormatterConfig) -> None:
        """Reject settings no render could honour."""
        if self.max_width is not None:
            if isinstance(self.max_width, bool) or not isinstance(self.max_width, int):
                msg = f"max_width must be an integer, not {type(self.max_width).__name__}"
                raise ConfigurationError(msg)
            if self.max_width <= 0:
                msg = f"max_width must be positive, got {self.max_width}"
                raise ConfigurationError(msg)
        if not isinstance(self.indent_unit, str):
            msg = f"indent_unit must be a string, not {type(self.indent_unit).__name__}"
            raise ConfigurationError(msg)

    @classmethod
    def no_rules(cls: type[FormatterConfig]) -> FormatterConfig:
        """Return a configuration that never compacts, i.e. a plain pretty printer."""
        return cls(max_width=None)

    @property
    def eol(self: FormatterConfig) -> str:
        """Line ending string."""
        return "\r\n" if self.eol_style == EolStyle.CRLF else "\n"

    def with_indent(self: FormatterConfig, indent: int | str) -> FormatterConfig:
        """Return a copy indenting by ``indent`` spaces, or by the given string."""
        if isinstance(indent, bool):
            msg = "indent must be a number of spaces or a string"
            raise ConfigurationError(msg)
        if isinstance(indent, int):
            if indent < 0:
                msg = f"indent must not be negative, got {indent}"
                raise ConfigurationError(msg)
            indent = " " * indent
        return replace(self, indent_unit=indent)

    def with_max_width(self: FormatterConfig, max_width: int | None) -> FormatterConfig:
        """Return a copy with a different line width."""
        return replace(self, max_width=max_width)
