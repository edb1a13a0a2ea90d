"""Reconstruct errors from the plain values created by `serialize()`."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from errorjson._values import ValueKind, classify_value
from errorjson.errorobject import ErrorObject, NonError
from errorjson.properties import define_properties, own_properties

logger = logging.getLogger(__name__)


def deserialize(
    value: object, *, error_type: type[ErrorObject] = ErrorObject
) -> BaseException:
    """
    Create an error from a plain value.

    * Exceptions are already errors, so they're returned unchanged (not copied).
    * Mappings (and other objects) become a new `error_type` instance. Its
      `message`, `name` and `stack` are taken from the value's properties of
      the same name, and all other properties are attached to the error as
      payload. Nested values are attached as-is, nested errors are not
      reconstructed. When the value has no `stack`, the error's stack is the
      point that `deserialize()` was called from.
    * Anything else (`None`, strings, numbers, lists, etc.) is wrapped in a
      `NonError` whose `message` is the JSON representation of the value.

    The input value is never modified and malformed input is never rejected.

    Parameters
    ----------
    value
        The value to create an error from, typically one produced by
        `serialize()` and transferred as JSON.
    error_type
        The type of error to create from mappings and objects. It must be an
        `ErrorObject` subclass that can be called without arguments, so
        `NonError` types are not allowed.

    Returns
    -------
    :
        An Exception representing `value`.

    Raises
    ------
    TypeError
        When `error_type` is a `NonError` type.

    Examples
    --------
    >>> error = deserialize({"message": "Oops", "name": "TypeError", "code": 42})
    >>> error.name, error.message, error.code
    ('TypeError', 'Oops', 42)
    >>> deserialize([1, 2]).message
    '[1,2]'
    """
    if issubclass(error_type, NonError):
        raise TypeError(
            f"error_type cannot be a NonError type: {error_type.__name__}"
        )
    if isinstance(value, BaseException):
        return value

    kind = classify_value(value)
    if kind is ValueKind.Mapping:
        assert isinstance(value, Mapping)
        source: Mapping[object, object] = value
    elif kind is ValueKind.Object or kind is ValueKind.Error:
        source = dict(own_properties(value))
    else:
        logger.debug("Value of kind %s is not an object", kind.name)
        return NonError(value)

    error = error_type()
    define_properties(error, source)
    if error.stack is None:
        error.capture_stack()
    return error
