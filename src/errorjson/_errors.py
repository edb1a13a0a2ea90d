from __future__ import annotations

from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, cast


@dataclass(init=False)
class ErrorJSONError(Exception):
    """The base class that all errorjson errors are subclasses of."""

    if not TYPE_CHECKING:
        message: str  # needed to have dataclass include message in the repr, etc

    def __init__(self, message: str, *args: object) -> None:
        super().__init__(message, *args)

    @property
    def message(self) -> str:
        return cast(str, self.args[0])

    def __str__(self) -> str:
        field_values = [
            (f.name, getattr(self, f.name)) for f in fields(self) if f.name != "message"
        ]
        values_fmt = ", ".join(f"{f}={v!r}" for (f, v) in field_values)

        if values_fmt:
            return f"{self.message}: {values_fmt}"
        return self.message


@dataclass(init=False)
class EncodeErrorJSONError(ErrorJSONError, ValueError):
    """A value could not be converted to its plain representation."""


@dataclass(init=False)
class RecursionDepthEncodeErrorJSONError(EncodeErrorJSONError):
    """
    A value is nested too deeply to be serialized.

    Raised when the number of composite values being descended into exceeds the
    `max_depth` option, or when the Python interpreter's recursion limit is
    reached first (in which case `max_depth` is `None`).
    """

    depth: int
    max_depth: int | None

    def __init__(self, message: str, *, depth: int, max_depth: int | None) -> None:
        super(RecursionDepthEncodeErrorJSONError, self).__init__(message)
        self.depth = depth
        self.max_depth = max_depth
