"""Recycling of visual elements between layout passes."""

import logging
from typing import Callable, Generic, Iterable, List, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')


class ReusePool(Generic[T]):
    """
    Hands out handles, preferring previously returned ones over new ones.

    Callers must enqueue every handle of the previous pass before dequeuing
    for the next one, otherwise handles leak or get bound twice.
    """

    def __init__(self, factory: Callable[[], T]):
        self._factory = factory
        self._free: List[T] = []
        self.created_count = 0

    def __len__(self) -> int:
        return len(self._free)

    def enqueue(self, handles: Iterable[T]) -> None:
        """Return handles to the free set."""
        self._free.extend(handles)

    def dequeue(self) -> T:
        """Take a free handle, constructing one only when none is left."""
        if self._free:
            return self._free.pop()
        self.created_count += 1
        logger.debug(f"Creating handle #{self.created_count}")
        return self._factory()
