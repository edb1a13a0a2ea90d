from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Generator

from errorjson._pycompat.dataclasses import slots_if310


@dataclass(init=False, **slots_if310())
class AncestorPath:
    """The composite values enclosing the value currently being serialized.

    Values are tracked by identity. A value is only on the path while it is
    being descended into, so a value reached again from a sibling branch is not
    considered to be an ancestor. Only references that lead back into the
    current path form a cycle.
    """

    _ancestors: list[object]
    _ancestor_ids: dict[int, int]

    def __init__(self) -> None:
        self._ancestors = []
        self._ancestor_ids = dict()

    def __contains__(self, obj: object) -> bool:
        return id(obj) in self._ancestor_ids

    def __len__(self) -> int:
        return len(self._ancestors)

    @contextmanager
    def descend(self, obj: object) -> Generator[int]:
        """Record `obj` as an ancestor for the duration of the `with` block.

        Yields the depth of `obj` on the path (the top-level value is at 1).
        """
        if obj in self:
            raise ValueError(f"Object is already an ancestor: {obj!r:.50}")
        # The list keeps obj alive, which keeps its id() unique while recorded.
        self._ancestors.append(obj)
        self._ancestor_ids[id(obj)] = len(self._ancestors)
        try:
            yield len(self._ancestors)
        finally:
            self._ancestors.pop()
            del self._ancestor_ids[id(obj)]
