from __future__ import annotations

from _thread import get_ident
from functools import wraps
from typing import Final, TypeVar

_T = TypeVar("_T")

# (id(obj), thread id) of objects whose __eq__ is currently running
_RUNNING_EQ_KEYS: Final[set[tuple[int, int]]] = set()


def recursive_eq(cls: type[_T]) -> type[_T]:
    """Allow `==` of classes whose values can contain references to themselves.

    This class decorator wraps `__eq__` so that a comparison reached again while
    it is already running on the same objects stops instead of recursing until
    the stack overflows.

    Two cyclic values are equal when their own `__eq__` is `True` and both
    sides loop back at the same points. `a -> b -> a` can equal
    `a' -> b' -> a'`, but not `a' -> b' -> A' -> B' -> a'`, because the cycles
    have a different length.
    """
    wrapped_eq = cls.__eq__

    @wraps(wrapped_eq)
    def __eq__(self: object, other: object) -> bool:
        if self is other:
            return True

        thread_id = get_ident()
        self_key = id(self), thread_id
        other_key = id(other), thread_id
        self_running = self_key in _RUNNING_EQ_KEYS
        other_running = other_key in _RUNNING_EQ_KEYS

        # Equal only if both sides loop back here together.
        if self_running or other_running:
            return self_running and other_running

        _RUNNING_EQ_KEYS.add(self_key)
        _RUNNING_EQ_KEYS.add(other_key)
        try:
            return wrapped_eq(self, other)
        finally:
            _RUNNING_EQ_KEYS.discard(self_key)
            _RUNNING_EQ_KEYS.discard(other_key)

    cls.__eq__ = __eq__  # type: ignore[method-assign]
    return cls
