from __future__ import annotations

import functools
import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ._errors import UnsupportedTagError


if TYPE_CHECKING:
    from collections.abc import Callable, Hashable, Mapping


logger = logging.getLogger(__name__)

T = TypeVar("T")


class FactorySelector(Generic[T]):
    """Closed dispatch table from a tag to the constructor of one family member.

    Callers pick a member by tag and get back a freshly built product without
    naming its concrete class. The tag set is fixed at construction; an
    unknown tag raises `UnsupportedTagError` and never falls back to a
    default member.

    Example:
      vehicles = FactorySelector({"car": Car, "bike": Bike})
      vehicles.create("car")    # -> Car()
      vehicles.create("truck")  # raises UnsupportedTagError

    """

    def __init__(self, constructors: Mapping[Hashable, Callable[..., T]]) -> None:
        if not constructors:
            msg = "At least one constructor must be provided."
            raise ValueError(msg)

        for tag, constructor in constructors.items():
            if not callable(constructor):
                msg = f"Constructor for tag {tag!r} must be callable, got {type(constructor).__name__}"
                raise TypeError(msg)

        self._constructors: Mapping[Hashable, Callable[..., T]] = MappingProxyType(dict(constructors))

    @property
    def tags(self) -> frozenset[Hashable]:
        return frozenset(self._constructors)

    def create(self, tag: Hashable, **kwargs: Any) -> T:
        """Build a new family member for `tag`.

        `kwargs` are passed to the constructor unchanged.
        """
        constructor = self._constructor(tag)
        logger.debug("Creating family member for tag %r", tag)
        return constructor(**kwargs)

    def factory_for(self, tag: Hashable) -> Callable[..., T]:
        """Return a callable that builds a new `tag` member on every call.

        The tag is validated now, not when the returned factory is called.
        """
        self._constructor(tag)
        return functools.partial(self.create, tag)

    def __contains__(self, tag: object) -> bool:
        return tag in self._constructors

    def __repr__(self) -> str:
        return f"FactorySelector(tags={sorted(map(repr, self._constructors))})"

    def _constructor(self, tag: Hashable) -> Callable[..., T]:
        try:
            return self._constructors[tag]
        except (KeyError, TypeError):
            raise UnsupportedTagError(tag, self.tags) from None
