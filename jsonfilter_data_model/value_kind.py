"""Classification and structural equality for values of the JSON value model."""
import math
from enum import Enum
from typing import Any

from jsonfilter_exception_model.exception import InvalidValueException


class ValueKind(Enum):
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"

    def __str__(self):
        return self.value


def kind_of(value: Any) -> ValueKind:
    """
    Return the JSON kind of a Python value.

    ``bool`` is checked before ``int`` because ``True`` is an ``int`` in Python
    but never a JSON number.

    Raises:
        InvalidValueException: If the value is not part of the JSON value model.
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, list):
        return ValueKind.ARRAY
    if isinstance(value, dict):
        return ValueKind.OBJECT
    raise InvalidValueException("Value is not a JSON value", type(value).__name__)


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def to_float(value: Any) -> float:
    """Convert a JSON number to a double; ints beyond the double range saturate to +-inf."""
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def json_equals(left: Any, right: Any) -> bool:
    """
    Structural equality across any two JSON values.

    Numbers compare by numeric value (``1 == 1.0``), a bool never equals a
    number, arrays compare element by element in order and objects compare by
    key set and per-key value, ignoring key order.
    """
    left_kind = kind_of(left)
    if left_kind != kind_of(right):
        return False

    if left_kind == ValueKind.ARRAY:
        return len(left) == len(right) and all(
            json_equals(l_item, r_item) for l_item, r_item in zip(left, right)
        )

    if left_kind == ValueKind.OBJECT:
        if left.keys() != right.keys():
            return False
        return all(json_equals(left[key], right[key]) for key in left)

    return left == right


def validate_json_value(value: Any) -> Any:
    """Walk a value and raise ``InvalidValueException`` if any node is not JSON."""
    kind = kind_of(value)
    if kind == ValueKind.ARRAY:
        for item in value:
            validate_json_value(item)
    elif kind == ValueKind.OBJECT:
        for key, item in value.items():
            if not isinstance(key, str):
                raise InvalidValueException("JSON object keys must be strings", type(key).__name__)
            validate_json_value(item)
    return value
