from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import TYPE_CHECKING, Generic, TypeVar

from ._errors import InitializationError


if TYPE_CHECKING:
    from collections.abc import Callable


logger = logging.getLogger(__name__)

T = TypeVar("T")


class SlotState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"


class LazySlot(Generic[T]):
    """Compute a value on first access and cache it for good.

    The initializer runs at most once, even under concurrent first access:
    one thread runs it while the others wait for the result. If the
    initializer raises, the slot stays uninitialized and the failure
    surfaces as `InitializationError`; the next `get()` tries again.
    There is no reset.
    """

    def __init__(self, initializer: Callable[[], T], *, name: str | None = None) -> None:
        if not callable(initializer):
            msg = f"Initializer must be callable, got {type(initializer).__name__}"
            raise TypeError(msg)

        self.name = name or getattr(initializer, "__qualname__", repr(initializer))
        self._initializer = initializer
        self._state = SlotState.UNINITIALIZED
        self._value: T | None = None
        self._lock = threading.Lock()
        self._owner: int | None = None

    @property
    def state(self) -> SlotState:
        return self._state

    @property
    def is_initialized(self) -> bool:
        return self._state is SlotState.INITIALIZED

    def get(self) -> T:
        if self._state is SlotState.INITIALIZED:
            return self._value  # type: ignore[return-value]

        if self._owner == threading.get_ident():
            msg = f"Initializer for {self.name!r} re-entered its own slot"
            raise InitializationError(self.name, msg)

        with self._lock:
            # another thread may have finished while we waited
            if self._state is SlotState.INITIALIZED:
                return self._value  # type: ignore[return-value]

            self._owner = threading.get_ident()
            try:
                value = self._initializer()
            except InitializationError:
                raise
            except Exception as e:
                logger.warning("Initializer for %r failed: %s", self.name, e)
                raise InitializationError(self.name) from e
            finally:
                self._owner = None

            self._value = value
            self._state = SlotState.INITIALIZED
            logger.debug("Initialized lazy slot %r", self.name)
            return value

    def __repr__(self) -> str:
        if self._state is SlotState.INITIALIZED:
            return f"LazySlot({self.name!r}, value={self._value!r})"
        return f"LazySlot({self.name!r}, {self._state.value})"


class GlobalSingleton(Generic[T]):
    """Process-wide instance built exactly once on first `get()`.

    Create one at the composition root and pass it to consumers; tests can
    build their own instead of sharing an ambient global.

    Example:
      settings = GlobalSingleton(load_settings)
      settings.get() is settings.get()  # True

    """

    def __init__(self, initializer: Callable[[], T], *, name: str | None = None) -> None:
        self._slot: LazySlot[T] = LazySlot(initializer, name=name)

    @property
    def name(self) -> str:
        return self._slot.name

    @property
    def is_initialized(self) -> bool:
        return self._slot.is_initialized

    def get(self) -> T:
        return self._slot.get()

    def __call__(self) -> T:
        return self._slot.get()

    def __repr__(self) -> str:
        return f"GlobalSingleton({self.name!r}, initialized={self.is_initialized})"


def singleton(initializer: Callable[[], T]) -> GlobalSingleton[T]:
    """Turn a zero-argument factory into a `GlobalSingleton`.

    Example:
      @singleton
      def registry() -> Registry:
          logger.info("Initializing registry")
          return Registry()

      registry.get() is registry()  # True

    """
    return GlobalSingleton(initializer)
