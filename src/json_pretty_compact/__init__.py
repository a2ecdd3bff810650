"""Pretty but compact JSON formatting package."""

import importlib.metadata

from json_pretty_compact.config import EolStyle, FormatterConfig  # noqa: F401
from json_pretty_compact.errors import (  # noqa: F401
    ConfigurationError,
    EmptyTokenQueueError,
    FormatterError,
    UnexpectedEventError,
)
from json_pretty_compact.formatter import PrettyCompactFormatter  # noqa: F401
from json_pretty_compact.layout import LayoutMode, LayoutTracker  # noqa: F401
from json_pretty_compact.serializer import Serializer, dump, dumps  # noqa: F401

__version__ = importlib.metadata.version("json-pretty-compact")


def _get_version() -> str:
    return __version__
