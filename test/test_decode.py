from __future__ import annotations

import json

import pytest

from errorjson import ErrorObject, NonError, deserialize, enumerable_keys, serialize
from errorjson.constants import NON_ERROR_NAME


@pytest.mark.parametrize(
    "value",
    [
        pytest.param(None, id="null"),
        pytest.param(1, id="number"),
        pytest.param(True, id="boolean"),
        pytest.param("123", id="string"),
        pytest.param([1], id="array"),
        pytest.param((1, "a"), id="tuple"),
    ],
)
def test_deserialize__non_objects_are_wrapped_in_NonError(value: object) -> None:
    deserialized = deserialize(value)

    assert isinstance(deserialized, NonError)
    assert isinstance(deserialized, Exception)
    assert deserialized.name == NON_ERROR_NAME
    assert deserialized.message == json.dumps(value, separators=(",", ":"))
    assert enumerable_keys(deserialized) == []


def test_deserialize__NonError_messages_are_json() -> None:
    assert deserialize(None).message == "null"  # type: ignore[attr-defined]
    assert deserialize(True).message == "true"  # type: ignore[attr-defined]
    assert deserialize("123").message == '"123"'  # type: ignore[attr-defined]
    assert deserialize([1, 2]).message == "[1,2]"  # type: ignore[attr-defined]


def test_deserialize__NonError_of_unencodable_value() -> None:
    deserialized = deserialize({1, 2}.difference([2]))

    assert isinstance(deserialized, NonError)
    assert deserialized.message == '"{1}"'


def test_deserialize__NonError_of_function() -> None:
    deserialized = deserialize(len)

    assert isinstance(deserialized, NonError)
    assert deserialized.message == json.dumps(repr(len))


def test_deserialize__error_is_returned_unchanged() -> None:
    error = ValueError("test")

    deserialized = deserialize(error)

    assert deserialized is error
    assert str(deserialized) == "test"


def test_deserialize__preserves_existing_properties() -> None:
    deserialized = deserialize({"message": "foo", "customProperty": True})

    assert isinstance(deserialized, ErrorObject)
    assert deserialized.message == "foo"
    assert deserialized.customProperty is True
    assert enumerable_keys(deserialized) == ["customProperty"]


def test_deserialize__plain_object() -> None:
    obj = {
        "message": "error message",
        "stack": "at <anonymous>:1:13",
        "name": "name",
        "code": "code",
    }

    deserialized = deserialize(obj)

    assert isinstance(deserialized, ErrorObject)
    assert deserialized.message == "error message"
    assert deserialized.stack == "at <anonymous>:1:13"
    assert deserialized.name == "name"
    assert deserialized.code == "code"
    assert str(deserialized) == "error message"


def test_deserialize__reflective_properties_are_not_enumerable() -> None:
    reflective = {
        "message": "error message",
        "stack": "at <anonymous>:1:13",
        "name": "name",
    }
    enumerables = {
        "code": "code",
        "path": "./path",
        "errno": 1,
        "syscall": "syscall",
        "randomProperty": "random",
    }

    deserialized = deserialize({**reflective, **enumerables})
    keys = enumerable_keys(deserialized)

    for prop in reflective:
        assert prop not in keys
    for prop in enumerables:
        assert prop in keys


def test_deserialize__does_not_modify_input() -> None:
    obj = {"message": "m", "name": "n", "stack": "s", "data": [1]}
    original = json.dumps(obj)

    deserialize(obj)

    assert json.dumps(obj) == original


def test_deserialize__missing_message_is_empty() -> None:
    deserialized = deserialize({"code": 1})

    assert isinstance(deserialized, ErrorObject)
    assert deserialized.message == ""
    assert deserialized.name == "Error"


def test_deserialize__non_string_reflective_values() -> None:
    deserialized = deserialize({"message": 404, "name": None})

    assert isinstance(deserialized, ErrorObject)
    assert deserialized.message == "404"
    assert deserialized.name == "None"


def test_deserialize__missing_stack_is_captured() -> None:
    deserialized = deserialize({"message": "foo", "name": "TypeError"})

    assert isinstance(deserialized, ErrorObject)
    stack = deserialized.stack
    assert stack is not None
    first, second, *_ = stack.splitlines()
    assert first == "TypeError: foo"
    assert second.startswith(
        f"    at test_deserialize__missing_stack_is_captured ({__file__}:"
    )


def test_deserialize__nested_errors_are_not_reconstructed() -> None:
    inner = {"message": "inner", "name": "Error"}

    deserialized = deserialize({"message": "outer", "cause": inner})

    assert isinstance(deserialized, ErrorObject)
    assert deserialized.cause is inner


def test_deserialize__payload_named_like_exception_attributes() -> None:
    deserialized = deserialize({"message": "foo", "args": [1, 2]})

    assert isinstance(deserialized, ErrorObject)
    assert deserialized.args == ("foo",)
    assert enumerable_keys(deserialized) == ["args"]
    assert serialize(deserialized) == {
        "name": "Error",
        "message": "foo",
        "stack": deserialized.stack,
        "args": [1, 2],
    }


def test_deserialize__object_attributes() -> None:
    class Failure:
        def __init__(self) -> None:
            self.message = "It broke"
            self.retry = False

    deserialized = deserialize(Failure())

    assert isinstance(deserialized, ErrorObject)
    assert deserialized.message == "It broke"
    assert enumerable_keys(deserialized) == ["retry"]


def test_deserialize__error_type() -> None:
    class AppError(ErrorObject):
        pass

    deserialized = deserialize({"message": "foo"}, error_type=AppError)

    assert type(deserialized) is AppError
    assert deserialized.message == "foo"


def test_deserialize__round_trip() -> None:
    error = ValueError("Disk full")
    error.code = "ENOSPC"  # type: ignore[attr-defined]

    deserialized = deserialize(json.loads(json.dumps(serialize(error))))

    assert deserialized == ErrorObject(
        "Disk full", name="ValueError", stack="ValueError: Disk full", code="ENOSPC"
    )


def test_deserialize__underscore_payload_keys_are_enumerable() -> None:
    deserialized = deserialize({"message": "m", "_id": 1, "code": 2, "__v": 0})

    assert isinstance(deserialized, ErrorObject)
    assert enumerable_keys(deserialized) == ["_id", "code", "__v"]
    assert deserialized._id == 1
    assert serialize(deserialized) == {
        "name": "Error",
        "message": "m",
        "stack": deserialized.stack,
        "_id": 1,
        "code": 2,
        "__v": 0,
    }


def test_deserialize__payload_cannot_replace_reflective_properties() -> None:
    deserialized = deserialize(
        {
            "message": "m",
            "stack": "s",
            "_ErrorObject__message": 5,
            "_ErrorObject__name": None,
            "_ErrorObject__stack": [],
            "_payload": {},
        }
    )

    assert isinstance(deserialized, ErrorObject)
    assert (deserialized.name, deserialized.message, deserialized.stack) == (
        "Error",
        "m",
        "s",
    )
    assert str(deserialized) == "m"
    assert enumerable_keys(deserialized) == [
        "_ErrorObject__message",
        "_ErrorObject__name",
        "_ErrorObject__stack",
        "_payload",
    ]


def test_deserialize__deeply_nested_array() -> None:
    value: list[object] = []
    for _ in range(100_000):
        value = [value]

    deserialized = deserialize(value)

    assert isinstance(deserialized, NonError)
    assert deserialized.message.startswith('"[[')
    assert json.loads(deserialized.message).endswith("]]")


def test_deserialize__rejects_NonError_error_type() -> None:
    with pytest.raises(
        TypeError, match=r"error_type cannot be a NonError type: NonError"
    ):
        deserialize({"message": "foo"}, error_type=NonError)
