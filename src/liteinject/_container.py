from __future__ import annotations

import inspect
import logging
import threading
import typing
from types import MappingProxyType
from typing import (
    TYPE_CHECKING,
    Any,
    Protocol,
    TypeVar,
    cast,
    overload,
)

from ._errors import NotFoundError, TypeMismatchError


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Hashable, Iterable, Iterator, Mapping

    T = TypeVar("T")

    Key = type[T] | Hashable


class Module:
    """Single-valued registry from a key to a pre-built instance.

    Populate a module at startup, hand it to a `Container`, and treat it as
    read-only from then on.
    """

    def __init__(self, name: str | None = None) -> None:
        self.name = name
        self._targets: dict[Any, object] = {}
        self._lock = threading.Lock()

    def add_target(self, value: object, key: Key[Any] | None = None) -> None:
        """Register `value` under `key`, or under its own class when no key is given.

        Re-registering a key silently replaces the previous instance.

        Example:
          module.add_target(MainViewModel())
          module.add_target(sqlite_db, key=Database)
          module.add_target("postgres://...", key="dsn")

        """
        if key is None:
            key = type(value)
        elif inspect.isclass(key):
            _check_instance(key, value, expected=key)

        with self._lock:
            if key in self._targets:
                logger.debug("Module %s: overwriting target for %r", self._label(), key)
            self._targets[key] = value

    def lookup(self, key: Key[Any]) -> object:
        """Return the instance registered under `key`, or raise `NotFoundError`."""
        try:
            return self._targets[key]
        except KeyError:
            raise NotFoundError(key) from None

    @property
    def targets(self) -> Mapping[Any, object]:
        return MappingProxyType(self._targets)

    def __contains__(self, key: object) -> bool:
        return key in self._targets

    def __len__(self) -> int:
        return len(self._targets)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._targets)

    def __repr__(self) -> str:
        return f"Module(name={self.name!r}, keys={list(self._targets)!r})"

    def _label(self) -> str:
        return self.name if self.name is not None else hex(id(self))


class Container:
    """Ordered composition of modules.

    - `inject` scans modules in the order given at construction
    - the earliest module holding a key wins
    - membership is fixed once the container exists.
    """

    def __init__(self, modules: Iterable[Module] = ()) -> None:
        self._modules: tuple[Module, ...] = tuple(modules)

    @property
    def modules(self) -> tuple[Module, ...]:
        return self._modules

    @overload
    def inject(self, key: type[T], expected: None = ...) -> T: ...

    @overload
    def inject(self, key: Hashable, expected: type[T]) -> T: ...

    @overload
    def inject(self, key: Hashable, expected: None = ...) -> object: ...

    def inject(self, key: Key[T], expected: type[T] | None = None) -> object:
        """Resolve `key` to the instance held by the earliest module that has it.

        - Class keys are checked with `isinstance` on the way out.
        - `expected` applies the same check to non-class keys.
        A failed check raises `TypeMismatchError`; nothing is coerced.
        """
        for module in self._modules:
            if key not in module:
                continue

            instance = module.lookup(key)
            if expected is None and inspect.isclass(key):
                expected = cast("type[T]", key)
            if expected is not None:
                _check_instance(key, instance, expected=expected)

            logger.debug("Injected %r from module %s", key, module._label())  # noqa: SLF001
            return instance

        raise NotFoundError(key)

    def __contains__(self, key: object) -> bool:
        return any(key in module for module in self._modules)

    def __repr__(self) -> str:
        return f"Container(modules={list(self._modules)!r})"


def _check_instance(key: Any, instance: object, *, expected: type) -> None:
    """Raise `TypeMismatchError` when `instance` is not an `expected`.

    Protocols that are not runtime-checkable cannot be tested with
    `isinstance`; their registrations are trusted.
    """
    if _is_protocol(expected) and not _is_runtime_checkable_protocol(expected):
        return

    if not isinstance(instance, expected):
        raise TypeMismatchError(key, expected, type(instance))


def _is_runtime_checkable_protocol(tp: type) -> bool:
    try:
        isinstance(None, tp)
    except TypeError:
        return False
    else:
        return True


if hasattr(typing, "is_protocol"):
    # https://docs.python.org/3/library/typing.html#typing.is_protocol
    def _is_protocol(tp: type) -> bool:
        return inspect.isclass(tp) and typing.is_protocol(tp)

else:

    def _is_protocol(tp: type) -> bool:
        """Detect whether 'tp' is a typing.Protocol subclass (safe)."""
        return inspect.isclass(tp) and issubclass(tp, cast("type", Protocol)) and tp is not Protocol
