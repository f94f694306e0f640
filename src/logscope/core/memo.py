"""Single-entry memoization keyed on a shallow comparison of inputs."""

import logging
from collections.abc import Callable, Hashable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()


class MemoCell(Generic[T]):
    """Cache the most recent result of a computation.

    The cached value is reused while the key compares equal to the key it
    was computed with; any other key triggers a recomputation that replaces
    the cache.

    Args:
        name: Label used in debug logging.
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._key: object = _MISSING
        self._value: T | None = None
        self.computations = 0

    def get(self, key: Hashable, compute: Callable[[], T]) -> T:
        """Return the cached value for ``key``, computing it if needed."""
        if self._key is not _MISSING and self._key == key:
            return self._value  # type: ignore[return-value]
        logger.debug("Recomputing %s", self._name)
        value = compute()
        self._key = key
        self._value = value
        self.computations += 1
        return value

    def clear(self) -> None:
        """Forget the cached value."""
        self._key = _MISSING
        self._value = None
