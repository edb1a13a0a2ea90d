from __future__ import annotations

from dataclasses import dataclass

from errorjson._errors import (
    EncodeErrorJSONError,
    ErrorJSONError,
    RecursionDepthEncodeErrorJSONError,
)


@dataclass(init=False)
class ExampleErrorJSONError(ErrorJSONError):
    key: str
    limit: float

    def __init__(self, message: str, *, key: str, limit: float) -> None:
        super().__init__(message)
        self.key = key
        self.limit = limit


def test_ErrorJSONError_str_with_fields() -> None:
    assert (
        str(ExampleErrorJSONError("Key too long", key="abc", limit=2.5))
        == "Key too long: key='abc', limit=2.5"
    )


def test_ErrorJSONError_str_without_fields() -> None:
    error = ErrorJSONError("Something went wrong")

    assert error.message == "Something went wrong"
    assert str(error) == "Something went wrong"


def test_EncodeErrorJSONError_is_ValueError() -> None:
    assert isinstance(EncodeErrorJSONError("Bad value"), ValueError)


def test_RecursionDepthEncodeErrorJSONError() -> None:
    error = RecursionDepthEncodeErrorJSONError("Too deep", depth=11, max_depth=10)

    assert isinstance(error, EncodeErrorJSONError)
    assert (error.depth, error.max_depth) == (11, 10)
    assert str(error) == "Too deep: depth=11, max_depth=10"
    assert repr(error) == (
        "RecursionDepthEncodeErrorJSONError(message='Too deep', depth=11, "
        "max_depth=10)"
    )
