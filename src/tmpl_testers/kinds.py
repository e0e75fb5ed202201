from __future__ import annotations

from enum import Enum

from typing_extensions import assert_never

from .types import (
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

class ValueKind(Enum):
    EMPTY = "empty"
    BOOLEAN = "boolean"
    STRING = "string"
    INTEGER = "integer"
    DOUBLE = "double"
    LIST = "list"
    MAP = "map"
    KV_PAIR = "kvpair"
    CALLABLE = "callable"

def classify(value: TmplValue) -> ValueKind:
    """Return the kind tag of a runtime value.

    Every variant of TmplValue has its own case; the trailing assert_never makes
    an unhandled variant a type-check error instead of a wrong kind.
    """
    match value:
        case TmplEmpty():
            return ValueKind.EMPTY
        case TmplBool():
            return ValueKind.BOOLEAN
        case TmplString():
            return ValueKind.STRING
        case TmplInt():
            return ValueKind.INTEGER
        case TmplDouble():
            return ValueKind.DOUBLE
        case TmplList():
            return ValueKind.LIST
        case TmplMap():
            return ValueKind.MAP
        case TmplKVPair():
            return ValueKind.KV_PAIR
        case TmplCallable():
            return ValueKind.CALLABLE
        case _:
            assert_never(value)

NUMBER_KINDS = frozenset({ValueKind.INTEGER, ValueKind.DOUBLE})
ITERABLE_KINDS = frozenset({ValueKind.LIST, ValueKind.MAP})
MAPPING_KINDS = frozenset({ValueKind.MAP, ValueKind.KV_PAIR})
