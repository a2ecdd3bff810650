"""Exceptions raised while configuring or driving the formatter."""

from __future__ import annotations


class FormatterError(Exception):
    """Base class for all formatter errors."""


class ConfigurationError(FormatterError, ValueError):
    """Invalid formatter configuration."""


class UnexpectedEventError(FormatterError):
    """The callback sequence does not describe a well-formed JSON document.

    Raised when an event of type ``expected`` was required but ``found``
    arrived instead. The formatter that raised it cannot be used again.
    """

    def __init__(self: UnexpectedEventError, expected: str, found: str) -> None:
        super().__init__(f"unexpected event (expected {expected}, found {found})")
        self.expected = expected
        self.found = found


class EmptyTokenQueueError(UnexpectedEventError):
    """An event needed an open list or dict but nothing was open."""

    def __init__(self: EmptyTokenQueueError, expected: str) -> None:
        super().__init__(expected, "empty token queue")
