"""Convert error-like Python values into plain, JSON-safe values."""

from __future__ import annotations

import logging
from _thread import get_ident
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Callable, Final

from errorjson._ancestors import AncestorPath
from errorjson._errors import RecursionDepthEncodeErrorJSONError
from errorjson._pycompat.dataclasses import slots_if310
from errorjson._pycompat.exceptions import add_note
from errorjson._values import (
    ValueKind,
    classify_value,
    custom_encoding_hook,
    function_name,
)
from errorjson.constants import CIRCULAR, function_descriptor
from errorjson.errorobject import reflective_properties
from errorjson.properties import own_properties, payload_properties

logger = logging.getLogger(__name__)

# (id(value), thread id) of values whose custom encoding hook is running
_RUNNING_HOOK_KEYS: Final[set[tuple[int, int]]] = set()


@dataclass(init=False, **slots_if310())
class SerializeContext:
    """Maintains the state of a single `serialize()` call.

    A context must not be shared between calls, as it tracks the values that
    are being descended into.
    """

    allow_custom_encoding: bool
    max_depth: int | None
    ancestors: AncestorPath
    deepest: int

    def __init__(
        self, *, allow_custom_encoding: bool = False, max_depth: int | None = None
    ) -> None:
        self.allow_custom_encoding = allow_custom_encoding
        self.max_depth = max_depth
        self.ancestors = AncestorPath()
        self.deepest = 0

    def serialize_value(self, value: object) -> object:
        """Convert a single value (and the values nested in it) to a plain value."""
        kind = classify_value(value)

        if kind is ValueKind.Null or kind is ValueKind.Scalar:
            return value
        if kind is ValueKind.Function:
            return function_descriptor(function_name(value))
        if value in self.ancestors:
            logger.debug(
                "Replaced cyclic reference to %s with %r", type(value).__name__, CIRCULAR
            )
            return CIRCULAR

        if self.allow_custom_encoding:
            hook = self._get_idle_hook(value)
            if hook is not None:
                return self._call_hook(value, hook)

        with self.ancestors.descend(value) as depth:
            self.deepest = max(self.deepest, depth)
            if self.max_depth is not None and depth > self.max_depth:
                raise RecursionDepthEncodeErrorJSONError(
                    "Value is nested more deeply than max_depth allows",
                    depth=depth,
                    max_depth=self.max_depth,
                )

            if kind is ValueKind.Error:
                result = dict[str, object](reflective_properties(value))
                result.update(self._serialize_properties(payload_properties(value)))
                return result
            if kind is ValueKind.Array:
                assert isinstance(value, Iterable)
                return [self._serialize_element(element) for element in value]
            return dict(self._serialize_properties(own_properties(value)))

    def _serialize_properties(
        self, properties: Iterable[tuple[str, object]]
    ) -> Iterator[tuple[str, object]]:
        for key, item in properties:
            if classify_value(item) is ValueKind.Function:
                logger.debug("Dropped callable property %r", key)
                continue
            yield key, self.serialize_value(item)

    def _serialize_element(self, element: object) -> object:
        # Positions are kept, functions leave a hole, which is null in JSON.
        if classify_value(element) is ValueKind.Function:
            logger.debug("Replaced callable array element with None")
            return None
        return self.serialize_value(element)

    def _get_idle_hook(self, value: object) -> Callable[[], object] | None:
        if (id(value), get_ident()) in _RUNNING_HOOK_KEYS:
            # The hook is serializing its own value, so encode it structurally.
            return None
        return custom_encoding_hook(value)

    def _call_hook(self, value: object, hook: Callable[[], object]) -> object:
        logger.debug("Using custom encoding of %s", type(value).__name__)
        key = id(value), get_ident()
        _RUNNING_HOOK_KEYS.add(key)
        try:
            return hook()
        except Exception as e:
            add_note(
                e,
                f"Raised by the custom encoding hook of {type(value).__name__} "
                f"while serializing",
            )
            raise
        finally:
            _RUNNING_HOOK_KEYS.discard(key)


@dataclass(init=False, **slots_if310())
class Serializer:
    """
    A re-usable configuration for serializing values into plain values.

    The `allow_custom_encoding` and `max_depth` arguments behave as described
    for [`serialize()`]. The `serialize()` method behaves like the
    `serialize()` function without needing to pass the arguments for every call.

    [`serialize()`]: `errorjson.serialize`

    Parameters
    ----------
    allow_custom_encoding
        Use the `to_json()` method of values that define one (and `isoformat()`
        of dates and times) instead of serializing them structurally.
    max_depth
        The maximum number of nested composite values (the top-level value
        counts as 1). `None` allows any depth up to Python's recursion limit.
    """

    allow_custom_encoding: bool
    max_depth: int | None

    def __init__(
        self, *, allow_custom_encoding: bool = False, max_depth: int | None = None
    ) -> None:
        if max_depth is not None and max_depth < 1:
            raise ValueError(f"max_depth must be at least 1: {max_depth}")
        self.allow_custom_encoding = allow_custom_encoding
        self.max_depth = max_depth

    def serialize(self, value: object) -> object:
        """
        Convert a value into a plain value.

        Parameters
        ----------
        value
            The value to serialize.

        Returns
        -------
        :
            A new plain value, made of dicts, lists and scalars.
        """
        ctx = SerializeContext(
            allow_custom_encoding=self.allow_custom_encoding, max_depth=self.max_depth
        )
        try:
            return ctx.serialize_value(value)
        except RecursionError as e:
            logger.debug("Recursion limit reached at depth %d", ctx.deepest)
            raise RecursionDepthEncodeErrorJSONError(
                "Value is nested too deeply to serialize",
                depth=ctx.deepest,
                max_depth=None,
            ) from e


def serialize(
    value: object,
    *,
    allow_custom_encoding: bool = False,
    max_depth: int | None = None,
) -> object:
    """
    Convert an error (or any other value) into a plain, JSON-safe value.

    Errors become dicts with `name`, `message` and `stack` keys (`stack` only
    when known), followed by the error's other properties. Other objects become
    dicts of their enumerable properties, and sequences and sets become lists.
    Nested values are converted recursively. The input is never modified.

    * References back to a value that contains them (cycles) are replaced by
      `"[Circular]"`. Values referenced more than once without forming a cycle
      are serialized in full each time.
    * Callables nested in objects are dropped. Callables in lists are replaced by
      `None`. A top-level callable becomes a string like `"[Function: main]"`.
    * Private (`_`-prefixed) and class-level attributes (such as properties) are
      never read.

    Parameters
    ----------
    value
        The value to serialize.
    allow_custom_encoding
        When `True`, values with a `to_json()` method (and dates and times, via
        `isoformat()`) are represented by the method's result, which is used
        as-is.
    max_depth
        The maximum number of nested composite values (the top-level value
        counts as 1). `None` allows any depth up to Python's recursion limit.

    Returns
    -------
    :
        A new plain value, made of dicts, lists and scalars.

    Raises
    ------
    RecursionDepthEncodeErrorJSONError
        When `value` is nested more deeply than `max_depth`, or than Python's
        recursion limit allows.

    Examples
    --------
    >>> error = ValueError("Oops")
    >>> error.args_checked = True
    >>> serialize(error)
    {'name': 'ValueError', 'message': 'Oops', 'stack': 'ValueError: Oops', \
'args_checked': True}
    >>> parent = {"name": "parent"}
    >>> parent["child"] = {"parent": parent}
    >>> serialize(parent)
    {'name': 'parent', 'child': {'parent': '[Circular]'}}
    """
    return Serializer(
        allow_custom_encoding=allow_custom_encoding, max_depth=max_depth
    ).serialize(value)
