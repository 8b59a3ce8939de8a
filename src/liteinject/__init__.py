"""Minimal type-keyed object runtime.

This package provides explicit, caller-driven object registration and
resolution for Python, together with the one-time initialization
primitives and family dispatch such registries are usually built from.

Exports:
- `Module`: Single-valued registry mapping a key (a class, string, enum
  member, ...) to a pre-built instance.
- `Container`: Ordered composition of modules; `inject(key)` returns the
  instance from the earliest module that holds the key.
- `FactorySelector`: Closed tag-to-constructor table that builds a fresh
  family member per `create(tag)` call.
- `LazySlot`: Value computed on first `get()`, at most once, thread-safe.
- `GlobalSingleton` / `singleton`: Process-wide instance constructed once.
"""

from ._container import Container, Module
from ._errors import (
    InitializationError,
    LiteInjectError,
    NotFoundError,
    TypeMismatchError,
    UnsupportedTagError,
)
from ._factory import FactorySelector
from ._lazy import GlobalSingleton, LazySlot, SlotState, singleton


__all__ = [
    "Container",
    "FactorySelector",
    "GlobalSingleton",
    "InitializationError",
    "LazySlot",
    "LiteInjectError",
    "Module",
    "NotFoundError",
    "SlotState",
    "TypeMismatchError",
    "UnsupportedTagError",
    "singleton",
]
