from __future__ import annotations

from typing_extensions import assert_never

from ..types import (
    TmplBool,
    TmplCallable,
    TmplDouble,
    TmplEmpty,
    TmplInt,
    TmplKVPair,
    TmplList,
    TmplMap,
    TmplString,
    TmplValue,
)

def to_bool(val: TmplValue) -> bool:
    match val:
        case TmplBool(value=b):
            return b
        case TmplEmpty():
            return False
        case TmplInt(value=num) | TmplDouble(value=num):
            return num != 0
        case TmplString(value=s):
            return bool(s)
        case TmplList(items=items):
            return bool(items)
        case TmplMap(slots=slots):
            return bool(slots)
        case _:
            return True

def to_string(value: TmplValue) -> str:
    """Canonical textual form used when a tester needs a string operand."""
    match value:
        case TmplString(value=s):
            return s
        case TmplEmpty():
            return ""
        case TmplBool(value=b):
            return "true" if b else "false"
        case TmplInt(value=num):
            return str(num)
        case TmplDouble(value=num):
            return repr(num)
        case TmplList(items=items):
            return "[" + ", ".join(_nested(item) for item in items) + "]"
        case TmplMap(slots=slots):
            return "{" + ", ".join(f"{k}: {_nested(v)}" for k, v in slots.items()) + "}"
        case TmplKVPair(key=key, value=val):
            return f"{key}: {_nested(val)}"
        case TmplCallable(name=name):
            return f"<callable {name}>"
        case _:
            assert_never(value)

def _nested(value: TmplValue) -> str:
    # strings inside containers keep their quotes
    if isinstance(value, TmplString):
        return repr(value.value)

    return to_string(value)

def as_integral(value: TmplValue) -> int | None:
    """Integer view of a number, or None when the value has no exact integer form."""
    if isinstance(value, TmplInt):
        return value.value

    if isinstance(value, TmplDouble) and value.value.is_integer():
        return int(value.value)

    return None
