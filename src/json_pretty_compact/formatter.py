"""Pretty compact JSON formatter."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import IntEnum, auto
from typing import TYPE_CHECKING, Any

from json_pretty_compact.config import FormatterConfig
from json_pretty_compact.errors import (
    EmptyTokenQueueError,
    FormatterError,
    UnexpectedEventError,
)
from json_pretty_compact.layout import LayoutMode, LayoutTracker

if TYPE_CHECKING:
    from collections.abc import Sequence
    from typing import TextIO

logger = logging.getLogger(__name__)
debug = logger.debug


class TokenKind(IntEnum):
    """Pending token enumeration."""

    BEGIN_ARRAY = auto()
    BEGIN_OBJECT = auto()
    KEY = auto()
    DATA = auto()


@dataclass
class Token:
    """An entry on the formatter's pending stack.

    A DATA token holds the finished text of a value. Begin tokens remember the
    depth and column their list or dict started at; KEY tokens remember the
    column their value will start at. ``separated`` records a separator
    that has been seen but not yet followed by the next key or value.
    """

    kind: TokenKind
    text: str = ""
    depth: int = 0
    column: int = 0
    separated: bool = False


@dataclass
class RenderState:
    """Mutable state of one render."""

    current_depth: int = 0
    current_column: int = 0


class PrettyCompactFormatter:
    """Writes JSON where every list or dict is kept on one line if it fits.

    The formatter receives structural events in document order. Finished text
    of closed values stays on a pending stack until the enclosing list or dict
    ends; at that point its children are joined into a single-line trial. The
    trial is kept if the line it starts on stays within ``max_width``,
    otherwise the children are written one per line, indented one level
    deeper. Only the finished root value reaches the sink, so nothing written
    there is ever revised.

    A child that spans several lines always expands its parent.

    An instance renders one document and must not be shared between threads.
    """

    def __init__(
        self: PrettyCompactFormatter,
        sink: TextIO,
        config: FormatterConfig | None = None,
        layout: LayoutTracker | None = None,
    ) -> None:
        """Create a formatter writing to ``sink``."""
        self.sink = sink
        self.config = config if config is not None else FormatterConfig()
        self.layout = layout if layout is not None else LayoutTracker(self.config)
        self.state = RenderState()
        self.token: list[Token] = []
        self.open: list[int] = []
        self.done = False
        self.broken = False

    def render_primitive(self: PrettyCompactFormatter, text: str) -> str:
        """Pass a primitive's text through unchanged."""
        self.state.current_column += self.layout.str_len(text)
        return text

    def render_array(
        self: PrettyCompactFormatter,
        children: Sequence[str],
        depth: int | None = None,
        column: int | None = None,
    ) -> str:
        """Join finished child texts into a list."""
        if column is not None:
            self.state.current_column = column
        if len(children) == 0:
            return self.render_primitive("[]")
        return self._render_composite("[", "]", list(children), depth, column)

    def render_object(
        self: PrettyCompactFormatter,
        children: Sequence[tuple[str, str]],
        depth: int | None = None,
        column: int | None = None,
    ) -> str:
        """Join finished (key, value) texts into a dict."""
        if column is not None:
            self.state.current_column = column
        if len(children) == 0:
            return self.render_primitive("{}")
        pair_separator = self.layout.pair_separator()
        items = [key + pair_separator + value for key, value in children]
        return self._render_composite("{", "}", items, depth, column)

    def _render_composite(
        self: PrettyCompactFormatter,
        open_bracket: str,
        close_bracket: str,
        items: list[str],
        depth: int | None,
        column: int | None,
    ) -> str:
        if depth is None:
            depth = self.state.current_depth
        if column is None:
            column = self.state.current_column

        layout = self.layout
        mode = LayoutMode.MULTI_LINE
        if self.config.max_width is not None and not any("\n" in s for s in items):
            trial = (
                layout.opening(open_bracket, LayoutMode.SINGLE_LINE)
                + layout.separator_for(LayoutMode.SINGLE_LINE).join(items)
                + layout.closing(close_bracket, LayoutMode.SINGLE_LINE, depth)
            )
            width = column + layout.str_len(trial)
            debug(
                f"render {open_bracket}{close_bracket}: depth={depth} "
                f"column={column} width={width} max_width={self.config.max_width}",
            )
            if width <= self.config.max_width:
                self.state.current_column = width
                return trial

        indent = layout.indent_for(depth + 1)
        buffer = [layout.opening(open_bracket, mode)]
        first_elem = True
        for item in items:
            if not first_elem:
                buffer.append(layout.separator_for(mode))
            buffer += [indent, item]
            first_elem = False
        buffer.append(layout.closing(close_bracket, mode, depth))
        debug(f"render {open_bracket}{close_bracket}: depth={depth} expanded")

        self.state.current_column = layout.indent_width(depth) + len(close_bracket)
        return "".join(buffer)

    def begin_array(self: PrettyCompactFormatter) -> None:
        self._push_begin(TokenKind.BEGIN_ARRAY, "begin_array")

    def array_element_separator(self: PrettyCompactFormatter) -> None:
        begin_idx = self._innermost(TokenKind.BEGIN_ARRAY, "array_element_separator")
        self._expect_last(TokenKind.DATA, "array_element_separator")
        self._separate(self.token[begin_idx], "array_element_separator")

    def end_array(self: PrettyCompactFormatter) -> None:
        begin_idx = self._innermost(TokenKind.BEGIN_ARRAY, "end_array")
        begin = self.token[begin_idx]
        if begin.separated:
            raise self._fail("value", "end_array after array_element_separator")
        children = [t.text for t in self.token[begin_idx + 1 :]]

        self.open.pop()
        self.state.current_depth -= 1
        text = self.render_array(children, begin.depth, begin.column)
        self._replace(begin_idx, text)

    def begin_object(self: PrettyCompactFormatter) -> None:
        self._push_begin(TokenKind.BEGIN_OBJECT, "begin_object")

    def object_key(self: PrettyCompactFormatter, key: str) -> None:
        """Start a property of the innermost dict."""
        begin = self.token[self._innermost(TokenKind.BEGIN_OBJECT, "object_key")]
        if self.token[-1].kind == TokenKind.KEY:
            raise self._fail("object value", "object_key")
        if self.token[-1].kind == TokenKind.DATA and not begin.separated:
            raise self._fail("object_value_separator", "object_key")
        begin.separated = False

        text = json.dumps(key, ensure_ascii=self.config.ensure_ascii)
        column = (
            self.layout.indent_width(self.state.current_depth)
            + self.layout.str_len(text)
            + len(self.layout.pair_separator())
        )
        self.token.append(Token(TokenKind.KEY, text, self.state.current_depth, column))

    def key_value_separator(self: PrettyCompactFormatter) -> None:
        self._innermost(TokenKind.BEGIN_OBJECT, "key_value_separator")
        self._expect_last(TokenKind.KEY, "key_value_separator")
        self._separate(self.token[-1], "key_value_separator")

    def object_value_separator(self: PrettyCompactFormatter) -> None:
        begin_idx = self._innermost(TokenKind.BEGIN_OBJECT, "object_value_separator")
        self._expect_last(TokenKind.DATA, "object_value_separator")
        self._separate(self.token[begin_idx], "object_value_separator")

    def end_object(self: PrettyCompactFormatter) -> None:
        begin_idx = self._innermost(TokenKind.BEGIN_OBJECT, "end_object")
        if self.token[-1].kind == TokenKind.KEY:
            raise self._fail("object value", "end_object")
        begin = self.token[begin_idx]
        if begin.separated:
            raise self._fail("object_key", "end_object after object_value_separator")
        pending = self.token[begin_idx + 1 :]
        children = [(k.text, v.text) for k, v in zip(pending[::2], pending[1::2])]

        self.open.pop()
        self.state.current_depth -= 1
        text = self.render_object(children, begin.depth, begin.column)
        self._replace(begin_idx, text)

    def write_string(self: PrettyCompactFormatter, value: str) -> None:
        self.write_raw(json.dumps(value, ensure_ascii=self.config.ensure_ascii))

    def write_number(self: PrettyCompactFormatter, value: Any) -> None:  # noqa: ANN401
        """Write an int, float or Decimal."""
        if isinstance(value, bool):
            msg = "write_number() expects a number, use write_bool() for booleans"
            raise TypeError(msg)
        if isinstance(value, Decimal):
            self.write_raw(str(value))
        else:
            self.write_raw(json.dumps(value))

    def write_bool(self: PrettyCompactFormatter, value: bool) -> None:  # noqa: FBT001
        self.write_raw("true" if value else "false")

    def write_null(self: PrettyCompactFormatter) -> None:
        self.write_raw("null")

    def write_raw(self: PrettyCompactFormatter, text: str) -> None:
        """Write an already encoded JSON value."""
        column = self._begin_value("value")
        self.state.current_column = column
        self.token.append(Token(TokenKind.DATA, self.render_primitive(text)))
        self._flush()

    def finish(self: PrettyCompactFormatter) -> None:
        """Check that exactly one complete value has been written."""
        self._check_usable()
        if not self.done:
            raise self._fail("end of document", "finish")

    def _check_usable(self: PrettyCompactFormatter) -> None:
        if self.broken:
            msg = "formatter is unusable after an unexpected event"
            raise FormatterError(msg)

    def _fail(
        self: PrettyCompactFormatter,
        expected: str,
        found: str,
    ) -> UnexpectedEventError:
        self.broken = True
        return UnexpectedEventError(expected, found)

    def _innermost(self: PrettyCompactFormatter, kind: TokenKind, event: str) -> int:
        """Return the stack index of the innermost open list or dict."""
        self._check_usable()
        if len(self.open) == 0:
            self.broken = True
            raise EmptyTokenQueueError(kind.name)
        idx = self.open[-1]
        if self.token[idx].kind != kind:
            raise self._fail(kind.name, f"{event} inside {self.token[idx].kind.name}")
        return idx

    def _expect_last(self: PrettyCompactFormatter, kind: TokenKind, event: str) -> None:
        if self.token[-1].kind != kind:
            raise self._fail(kind.name, f"{event} after {self.token[-1].kind.name}")

    def _begin_value(self: PrettyCompactFormatter, event: str) -> int:
        """Validate that a value may start here, return the column it starts at."""
        self._check_usable()
        if len(self.open) == 0:
            if self.done or len(self.token) != 0:
                raise self._fail("end of document", event)
            return 0

        parent = self.token[self.open[-1]]
        last = self.token[-1]
        if parent.kind == TokenKind.BEGIN_OBJECT:
            if last.kind != TokenKind.KEY:
                raise self._fail("object_key", event)
            if not last.separated:
                raise self._fail("key_value_separator", event)
            last.separated = False
            return last.column
        if last.kind == TokenKind.DATA and not parent.separated:
            raise self._fail("array_element_separator", event)
        parent.separated = False
        return self.layout.indent_width(self.state.current_depth)

    def _separate(self: PrettyCompactFormatter, token: Token, event: str) -> None:
        if token.separated:
            raise self._fail("value", f"repeated {event}")
        token.separated = True

    def _push_begin(self: PrettyCompactFormatter, kind: TokenKind, event: str) -> None:
        column = self._begin_value(event)
        self.state.current_column = column
        self.open.append(len(self.token))
        self.token.append(Token(kind, "", self.state.current_depth, column))
        self.state.current_depth += 1

    def _replace(self: PrettyCompactFormatter, begin_idx: int, text: str) -> None:
        """Collapse a closed list or dict into a single DATA token."""
        del self.token[begin_idx:]
        self.token.append(Token(TokenKind.DATA, text))
        self._flush()

    def _flush(self: PrettyCompactFormatter) -> None:
        if len(self.open) == 0 and len(self.token) == 1:
            text = self.token.pop().text
            self.sink.write(text)
            self.done = True
