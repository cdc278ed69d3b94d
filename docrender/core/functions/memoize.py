# docrender/core/functions/memoize.py
"""
MemoCell - Single-slot memoization keyed by input identity

Derived table views (filtered rows, unique-value indexes) are recomputed
only when one of their declared inputs changes identity. Session state is
updated copy-on-write, so an unchanged input is the very same object and
an identity check is enough. Plain value types (str, int, enums, frozen
dataclasses) compare by equality instead, because two equal strings are
not guaranteed to be the same object.
"""
import dataclasses
from enum import Enum
from typing import Any, Callable, Generic, Optional, Tuple, TypeVar

R = TypeVar("R")

_VALUE_TYPES = (str, bytes, int, float, bool, type(None), Enum)


def same_input(a: Any, b: Any) -> bool:
    """Return True if two memo inputs count as unchanged."""
    if a is b:
        return True
    if isinstance(a, _VALUE_TYPES) and type(a) is type(b):
        return a == b
    if (
        dataclasses.is_dataclass(a)
        and not isinstance(a, type)
        and type(a) is type(b)
        and a.__dataclass_params__.frozen
    ):
        return a == b
    return False


class MemoCell(Generic[R]):
    """Caches the last result of compute(*inputs)."""

    def __init__(self, compute: Callable[..., R]):
        self._compute = compute
        self._inputs: Optional[Tuple[Any, ...]] = None
        self._value: Optional[R] = None
        self.hits = 0
        self.misses = 0

    def get(self, *inputs: Any) -> R:
        cached = self._inputs
        if cached is not None and len(cached) == len(inputs) and all(
            same_input(old, new) for old, new in zip(cached, inputs)
        ):
            self.hits += 1
            return self._value
        self.misses += 1
        self._value = self._compute(*inputs)
        self._inputs = inputs
        return self._value

    def invalidate(self) -> None:
        self._inputs = None
        self._value = None


__all__ = [
    "same_input",
    "MemoCell",
]
