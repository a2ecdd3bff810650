"""Walk Python values and drive the formatter."""

from __future__ import annotations

import io
import warnings
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any

from json_pretty_compact.config import FormatterConfig
from json_pretty_compact.formatter import PrettyCompactFormatter

if TYPE_CHECKING:
    from pathlib import PosixPath
    from typing import TextIO


class Serializer:
    """Feeds a value tree to a formatter in document order."""

    def __init__(self: Serializer, formatter: PrettyCompactFormatter) -> None:
        """Create a serializer for a single document."""
        self.formatter = formatter

    def serialize(self: Serializer, value: Any) -> None:  # noqa: ANN401
        """Serialize one complete document."""
        self.serialize_element(value)
        self.formatter.finish()

    def serialize_element(self: Serializer, element: Any) -> None:  # noqa: ANN401
        """Root serializing function for recursion."""
        fmt = self.formatter
        if isinstance(element, dict):
            self.serialize_dict(element)
        elif isinstance(element, (list, tuple)):
            self.serialize_list(element)
        elif element is None:
            fmt.write_null()
        elif isinstance(element, bool):
            fmt.write_bool(element)
        elif isinstance(element, (int, float, Decimal)):
            fmt.write_number(element)
        elif isinstance(element, str):
            fmt.write_string(element)
        else:
            msg = f"Object of type {type(element).__name__} is not JSON serializable"
            raise TypeError(msg)

    def serialize_list(self: Serializer, element: list | tuple) -> None:
        fmt = self.formatter
        fmt.begin_array()
        for index, child in enumerate(element):
            if index:
                fmt.array_element_separator()
            self.serialize_element(child)
        fmt.end_array()

    def serialize_dict(self: Serializer, element: dict) -> None:
        """Serialize a dict, coercing keys to strings.

        Keys are coerced the way the json module does it. Enum keys use their
        value. A key that collides with an earlier one after coercion replaces
        its value but keeps the earlier position.
        """
        items: dict[str, Any] = {}
        for k, v in element.items():
            if isinstance(k, Enum):
                k = k.value  # noqa: PLW2901
            if not isinstance(k, str):
                warnings.warn(
                    f"converting key value {k} to string",
                    RuntimeWarning,
                    stacklevel=2,
                )
                k = _key_to_str(k)  # noqa: PLW2901
            if k in items:
                warnings.warn(
                    f"duplicate key value {k}",
                    RuntimeWarning,
                    stacklevel=2,
                )
            items[k] = v

        fmt = self.formatter
        fmt.begin_object()
        for index, (k, v) in enumerate(items.items()):
            if index:
                fmt.object_value_separator()
            fmt.object_key(k)
            fmt.key_value_separator()
            self.serialize_element(v)
        fmt.end_object()


def _key_to_str(k: Any) -> str:  # noqa: ANN401
    if k is None:
        return "null"
    if isinstance(k, bool):
        return "true" if k else "false"
    return str(k)


def dump(
    obj: Any,  # noqa: ANN401
    output: str | PosixPath | TextIO,
    config: FormatterConfig | None = None,
    newline_at_eof: bool = True,  # noqa: FBT001, FBT002
) -> None:
    """Write formatted JSON to a file name or an open text file."""
    config = config if config is not None else FormatterConfig()
    if hasattr(output, "write"):
        Serializer(PrettyCompactFormatter(output, config)).serialize(obj)
        if newline_at_eof:
            output.write(config.eol)
        return

    formatted = dumps(obj, config)
    if newline_at_eof:
        formatted += config.eol
    with open(output, "w", encoding="utf-8", newline="") as f:
        f.write(formatted)


def dumps(obj: Any, config: FormatterConfig | None = None) -> str:  # noqa: ANN401
    """Serialize a value to formatted JSON."""
    sink = io.StringIO()
    Serializer(PrettyCompactFormatter(sink, config)).serialize(obj)
    return sink.getvalue()
