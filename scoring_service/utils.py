"""
Helpers for values coming from request bodies and model output.
"""
from typing import Any


def is_falsy(value: Any) -> bool:
    """
    JavaScript-style falsiness of a JSON value: null, false, 0, NaN and "".
    Empty objects and arrays count as present.
    """
    if value is None or value is False:
        return True
    if isinstance(value, (int, float)) and (value == 0 or value != value):
        return True
    return value == ""
