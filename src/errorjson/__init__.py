"""The main public API of errorjson."""

from __future__ import annotations

import logging

from errorjson._errors import EncodeErrorJSONError as EncodeErrorJSONError
from errorjson._errors import ErrorJSONError as ErrorJSONError
from errorjson._errors import (
    RecursionDepthEncodeErrorJSONError as RecursionDepthEncodeErrorJSONError,
)
from errorjson.constants import CIRCULAR as CIRCULAR
from errorjson.constants import NON_ERROR_NAME as NON_ERROR_NAME
from errorjson.decode import deserialize as deserialize
from errorjson.encode import Serializer as Serializer
from errorjson.encode import serialize as serialize
from errorjson.errorobject import ErrorObject as ErrorObject
from errorjson.errorobject import NonError as NonError
from errorjson.constants import REFLECTIVE_PROPERTIES as REFLECTIVE_PROPERTIES
from errorjson.properties import enumerable_keys as enumerable_keys

logging.getLogger(__name__).addHandler(logging.NullHandler())
