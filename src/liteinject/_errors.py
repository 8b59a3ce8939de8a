from __future__ import annotations

from typing import Any


class LiteInjectError(RuntimeError):
    """Base class for every failure raised by liteinject."""


class NotFoundError(LiteInjectError, LookupError):
    """No module in the container holds the requested key."""

    def __init__(self, key: Any) -> None:
        self.key = key
        super().__init__(f"No target registered for key: {_describe(key)}")


class UnsupportedTagError(LiteInjectError, LookupError):
    """A factory selector was asked for a tag outside its closed set."""

    def __init__(self, tag: Any, supported: frozenset[Any]) -> None:
        self.tag = tag
        self.supported = supported
        known = ", ".join(sorted(repr(t) for t in supported))
        super().__init__(f"Unsupported tag {tag!r}. Known tags: {known}")


class TypeMismatchError(LiteInjectError, TypeError):
    """A stored instance is not of the kind its key promises.

    This is a programming error rather than a recoverable condition: the
    instance is never coerced.
    """

    def __init__(self, key: Any, expected: type, actual: type) -> None:
        self.key = key
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Instance for key {_describe(key)} is {actual.__name__}, expected {expected.__name__}"
        )


class InitializationError(LiteInjectError):
    """A lazy initializer failed. The slot stays uninitialized, so a later call may retry."""

    def __init__(self, name: str, msg: str | None = None) -> None:
        self.name = name
        super().__init__(msg or f"Initializer for {name!r} failed")


def _describe(key: Any) -> str:
    if isinstance(key, type):
        return key.__qualname__
    return repr(key)
