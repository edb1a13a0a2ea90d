"""
Classify the attributes of values as reflective or payload properties.

Error-shaped values have two kinds of property:

* Reflective properties (`name`, `message` and `stack`) describe the error.
  Like the properties of a native JavaScript `Error`, they are not enumerable:
  they are not listed among an error's own keys, and the serializer only
  includes them for error-shaped values, where it adds them explicitly.
* Payload properties are everything else. They are enumerable and are carried
  through serialization unchanged.

Python has no per-attribute enumerable flag, so enumerability follows the usual
Python conventions. The enumerable properties of a mapping are its items. The
enumerable properties of an `ErrorObject` are its payload, whatever the keys.
The enumerable properties of any other object are the public (not
`_`-prefixed) entries of its instance `__dict__`. Class-level attributes, such
as methods and `@property` accessors, are never enumerated, and so are never
called.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from enum import Enum

from errorjson.constants import REFLECTIVE_PROPERTIES as REFLECTIVE_PROPERTIES
from errorjson.errorobject import ErrorObject

logger = logging.getLogger(__name__)


class PropertyKind(Enum):
    """The two disjoint kinds of property of an error-shaped value."""

    Reflective = "Reflective"
    """Describes the error itself. Not enumerable."""
    Payload = "Payload"
    """Custom data attached to the error. Enumerable."""


def classify_property(key: object) -> PropertyKind:
    """Get the kind of property that `key` names on an error-shaped value.

    Examples
    --------
    >>> classify_property("stack")
    <PropertyKind.Reflective: 'Reflective'>
    >>> classify_property("code")
    <PropertyKind.Payload: 'Payload'>
    """
    if key in REFLECTIVE_PROPERTIES:
        return PropertyKind.Reflective
    return PropertyKind.Payload


def _property_key(key: object) -> str:
    return key if isinstance(key, str) else str(key)


def own_properties(value: object) -> Iterator[tuple[str, object]]:
    """Iterate the enumerable own `(key, value)` properties of a value.

    Keys that are not strings are converted with `str()`. A converted key can
    equal another key of the mapping, such as `1` and `"1"`. Both are yielded
    and, when collected into a dict, the later value replaces the earlier one.
    Values without enumerable properties (including scalars and objects
    without a `__dict__`) have none.
    """
    if isinstance(value, Mapping):
        seen: set[str] = set()
        for key, item in value.items():
            property_key = _property_key(key)
            if property_key in seen:
                logger.debug(
                    "Property key %r occurs more than once after str() conversion",
                    property_key,
                )
            seen.add(property_key)
            yield property_key, item
        return
    if isinstance(value, ErrorObject):
        yield from list(value._payload.items())
        return

    try:
        attributes = vars(value)
    except TypeError:
        return
    for key, item in list(attributes.items()):
        if not key.startswith("_"):
            yield key, item


def payload_properties(value: object) -> Iterator[tuple[str, object]]:
    """Iterate the enumerable own properties of a value that are not reflective."""
    for key, item in own_properties(value):
        if classify_property(key) is PropertyKind.Payload:
            yield key, item


def enumerable_keys(value: object) -> list[str]:
    """Get the names of the enumerable own properties of a value, in order.

    This is the equivalent of JavaScript's `Object.keys()`. The reflective
    properties of an `ErrorObject` are never listed.
    """
    return list(dict(own_properties(value)))


def define_properties(error: ErrorObject, source: Mapping[object, object]) -> None:
    """Assign the properties of a plain `source` mapping to `error`.

    Reflective properties are set as `error`'s `name`, `message` and `stack`.
    `message` is always set, defaulting to `""`. `name` and `stack` are only
    set when `source` has them. All other items become enumerable payload
    properties, with their values assigned as-is.
    """
    message = source.get("message")
    error.message = "" if message is None else _property_key(message)
    if "name" in source:
        error.name = _property_key(source["name"])
    if "stack" in source:
        stack = source["stack"]
        error.stack = None if stack is None else _property_key(stack)

    for key, item in source.items():
        key = _property_key(key)
        if classify_property(key) is PropertyKind.Payload:
            error._payload[key] = item
