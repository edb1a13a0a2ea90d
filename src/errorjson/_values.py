from __future__ import annotations

import inspect
from collections import abc
from datetime import date, time
from enum import Enum
from functools import partial
from typing import Callable

from errorjson.constants import ANONYMOUS_FUNCTION_NAME, CUSTOM_ENCODING_METHOD
from errorjson.errorobject import is_error_shaped


class ValueKind(Enum):
    """The kinds of value that are distinguished when serializing."""

    Null = "Null"
    Scalar = "Scalar"
    Function = "Function"
    Error = "Error"
    Mapping = "Mapping"
    Array = "Array"
    Object = "Object"

    @property
    def is_composite(self) -> bool:
        """Composite values have properties or elements, and can contain cycles."""
        return self in _COMPOSITE_KINDS


_COMPOSITE_KINDS = frozenset(
    [ValueKind.Error, ValueKind.Mapping, ValueKind.Array, ValueKind.Object]
)


def classify_value(value: object) -> ValueKind:
    """Determine the `ValueKind` of a value.

    The checks are made in order, the first that matches decides the kind.
    Anything not matched by a more specific check is an `Object`.
    """
    if value is None:
        return ValueKind.Null
    if isinstance(value, (str, int, float)):
        return ValueKind.Scalar
    if is_function(value):
        return ValueKind.Function
    if is_error_shaped(value):
        return ValueKind.Error
    if isinstance(value, abc.Mapping):
        return ValueKind.Mapping
    if isinstance(value, (abc.Sequence, abc.Set)) and not isinstance(
        value, (bytes, bytearray)
    ):
        return ValueKind.Array
    return ValueKind.Object


def is_function(value: object) -> bool:
    """Check if a value is executable: a function, method, class or partial."""
    return inspect.isroutine(value) or isinstance(value, (type, partial))


def function_name(fn: object) -> str:
    """Get the name a callable is described by, or `"anonymous"`.

    Examples
    --------
    >>> function_name(len)
    'len'
    >>> function_name(lambda: None)
    'anonymous'
    """
    if isinstance(fn, partial):
        return function_name(fn.func)
    name = getattr(fn, "__name__", None)
    if not isinstance(name, str) or not name or name == "<lambda>":
        return ANONYMOUS_FUNCTION_NAME
    return name


def custom_encoding_hook(value: object) -> Callable[[], object] | None:
    """Get the function that provides the custom encoding of a value, if it has one.

    Values provide a custom encoding by defining a zero-argument `to_json()`
    method. Dates and times are encoded by their `isoformat()` method.

    The method is looked up on the value's type, so instance attributes named
    `to_json` (for example, payload data) are not treated as a hook.
    """
    if isinstance(value, (date, time)):
        return value.isoformat
    if callable(getattr(type(value), CUSTOM_ENCODING_METHOD, None)):
        hook: Callable[[], object] = getattr(value, CUSTOM_ENCODING_METHOD)
        return hook
    return None
