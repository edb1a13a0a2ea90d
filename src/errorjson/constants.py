"""Fixed values that appear in serialized error representations."""

from __future__ import annotations

from typing import Final

CIRCULAR: Final = "[Circular]"
"""Substituted for a reference back to an object that is still being serialized."""

DEFAULT_ERROR_NAME: Final = "Error"
"""The `name` of an `ErrorObject` created without an explicit name."""

NON_ERROR_NAME: Final = "NonError"
"""The `name` of errors that wrap values which were not error-shaped."""

ANONYMOUS_FUNCTION_NAME: Final = "anonymous"
"""Used in place of the name of lambdas and other callables without a name."""

CUSTOM_ENCODING_METHOD: Final = "to_json"
"""The zero-argument method that values define to provide their own encoding."""


def function_descriptor(name: str) -> str:
    """Get the string that represents a callable when serialized.

    Examples
    --------
    >>> function_descriptor("main")
    '[Function: main]'
    """
    return f"[Function: {name}]"

REFLECTIVE_PROPERTIES: Final = ("name", "message", "stack")
"""The names of the reflective properties of error-shaped values, in output order."""
