from __future__ import annotations

import json
import logging
import reprlib
from collections.abc import Mapping
from reprlib import recursive_repr
from typing import TYPE_CHECKING, Any

from errorjson._errors import ErrorJSONError
from errorjson._recursive_eq import recursive_eq
from errorjson._traceback import capture_stack, format_exception_stack
from errorjson.constants import (
    DEFAULT_ERROR_NAME,
    NON_ERROR_NAME,
    REFLECTIVE_PROPERTIES,
)

if TYPE_CHECKING:
    from typing_extensions import Self

logger = logging.getLogger(__name__)


@recursive_eq
class ErrorObject(ErrorJSONError):
    """
    A Python Exception with the shape of a JavaScript `Error`.

    `ErrorObject` is the result of deserializing a plain error representation.
    Its `name`, `message` and `stack` are reflective properties: they can be
    read and assigned, but are not among the object's enumerable properties.
    All other data attached to the error is payload. Payload is held apart from
    the error's own attributes, so any key (including `_`-prefixed keys) can be
    payload. Payload is readable as attributes, assigning a new public
    attribute adds to it, and it is listed by `enumerable_keys()` and
    serialized.

    Parameters
    ----------
    message
        A description of the error. `None` is the same as `""`.
    name
        The category of the error, such as `"TypeError"`.
    stack
        The stack trace detailing where the error happened.
    payload
        Attributes to attach to the error.

    Examples
    --------
    >>> from errorjson.properties import enumerable_keys
    >>> error = ErrorObject("Disk full", name="IOError", code="ENOSPC")
    >>> error.code
    'ENOSPC'
    >>> enumerable_keys(error)
    ['code']
    """

    __slots__ = ("__name", "__message", "__stack", "_payload")

    __name: str
    __message: str
    __stack: str | None
    _payload: dict[str, object]

    def __init__(
        self,
        message: str | None = None,
        *,
        name: str = DEFAULT_ERROR_NAME,
        stack: str | None = None,
        **payload: object,
    ) -> None:
        if message is None:
            message = ""
        super(ErrorObject, self).__init__(message)
        self.__name = name
        self.__message = message
        self.__stack = stack
        self._payload = dict(payload)

    def __getattr__(self, name: str) -> Any:
        if name == "_payload":
            raise AttributeError(name)
        try:
            return self._payload[name]
        except KeyError:
            raise AttributeError(
                f"{type(self).__name__!r} object has no attribute {name!r}"
            ) from None

    def __setattr__(self, name: str, value: object) -> None:
        # Private names and attributes defined by the class are not payload
        if name.startswith("_") or hasattr(type(self), name):
            super(ErrorObject, self).__setattr__(name, value)
        else:
            self._payload[name] = value

    def __delattr__(self, name: str) -> None:
        if name in self._payload:
            del self._payload[name]
        else:
            super(ErrorObject, self).__delattr__(name)

    @property
    def name(self) -> str:
        """The category of the error."""
        return self.__name

    @name.setter
    def name(self, name: str) -> None:
        self.__name = name

    @property  # type: ignore[override]
    def message(self) -> str:
        """The error's description."""
        return self.__message

    @message.setter
    def message(self, message: str | None) -> None:
        self.__message = message or ""
        self.args = (self.__message, *self.args[1:])

    @property
    def stack(self) -> str | None:
        """The stack trace showing where the error happened, if known."""
        return self.__stack

    @stack.setter
    def stack(self, stack: str | None) -> None:
        self.__stack = stack

    def capture_stack(self) -> None:
        """Set `stack` to the current point of execution, like a new JS Error."""
        self.__stack = capture_stack(self.__name, self.__message)

    @classmethod
    def from_exception(cls, exc: BaseException) -> Self:
        """Create an `ErrorObject` that reproduces the details of a Python Exception.

        The error's `name` is the exception's type name, the `message` is
        `str(exc)` and the `stack` is rendered from the exception's traceback.
        Public instance attributes of the exception become payload. Exceptions
        that set their own `name`, `message` or `stack` string attributes use
        those instead.
        """
        reflective = reflective_properties(exc)
        error = cls(
            reflective["message"],
            name=reflective["name"],
            stack=reflective.get("stack"),
        )
        if isinstance(exc, ErrorObject):
            error._payload.update(exc._payload)
        else:
            error._payload.update(
                (key, value)
                for key, value in vars(exc).items()
                if not key.startswith("_") and key not in REFLECTIVE_PROPERTIES
            )
        return error

    def __str__(self) -> str:
        return self.__message

    @recursive_repr()
    def __repr__(self) -> str:
        args = [repr(self.__message)]
        if self.__name != DEFAULT_ERROR_NAME:
            args.append(f"name={self.__name!r}")
        if self.__stack is not None:
            args.append(f"stack={self.__stack!r}")
        args.extend(f"{key}={value!r}" for key, value in self._payload.items())
        return f"{type(self).__name__}({', '.join(args)})"

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, ErrorObject):
            return NotImplemented
        if self.__traceback__ != other.__traceback__:
            return False
        return (self.name, self.message, self.stack) == (
            other.name,
            other.message,
            other.stack,
        ) and self._payload == other._payload


class NonError(ErrorObject):
    """
    An error that holds a value which is not error-shaped.

    Deserializing a value that is not an object (such as `None`, a number, a
    string or a list) produces a `NonError` whose `message` is the JSON text of
    the value. Its `stack` is captured when it's created, and it has no payload.

    Examples
    --------
    >>> error = NonError([1, "two"])
    >>> error.name, error.message
    ('NonError', '[1,"two"]')
    """

    def __init__(self, value: object) -> None:
        super(NonError, self).__init__(_json_text(value), name=NON_ERROR_NAME)
        self.capture_stack()
        logger.debug("Wrapped %s value in NonError", type(value).__name__)

    @property
    def name(self) -> str:
        return NON_ERROR_NAME

    @name.setter
    def name(self, name: str) -> None:
        if name != NON_ERROR_NAME:
            raise AttributeError(f"NonError name is always {NON_ERROR_NAME!r}")

    def __repr__(self) -> str:
        return f"NonError({self.message!r})"


def is_error_shaped(value: object) -> bool:
    """Check if a value is an Exception, or an object with a `message` attribute.

    Only instance attributes are considered. A `message` that is provided by a
    class-level `@property` is not accessed.
    """
    if isinstance(value, BaseException):
        return True
    if isinstance(value, Mapping):
        return False
    try:
        return isinstance(vars(value).get("message"), str)
    except TypeError:  # no __dict__
        return False


def reflective_properties(value: object) -> dict[str, str]:
    """
    Get the `name`, `message` and `stack` of an error-shaped value.

    Returns
    -------
    :
        A dict with `name` and `message`, and `stack` when the value has one, in
        that order.
    """
    if isinstance(value, ErrorObject):
        name, message, stack = value.name, value.message, value.stack
    else:
        try:
            attributes = vars(value)
        except TypeError:
            attributes = {}
        name, message, stack = (attributes.get(p) for p in REFLECTIVE_PROPERTIES)
        if not isinstance(name, str):
            name = type(value).__name__
        if not isinstance(message, str):
            message = str(value) if isinstance(value, BaseException) else ""
        if not isinstance(stack, str):
            stack = (
                format_exception_stack(value)
                if isinstance(value, BaseException)
                else None
            )

    result = {"name": name, "message": message}
    if stack is not None:
        result["stack"] = stack
    return result


def _json_text(value: object) -> str:
    try:
        return json.dumps(value, separators=(",", ":"))
    except (TypeError, ValueError, RecursionError):
        # not JSON-encodable, contains a cycle or is nested too deeply
        pass
    try:
        return json.dumps(repr(value))
    except RecursionError:
        # reprlib only renders a few levels of nesting
        return json.dumps(reprlib.repr(value))
