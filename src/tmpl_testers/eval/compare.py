from __future__ import annotations

from enum import Enum
from typing import Optional

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

class CompareOp(Enum):
    EQ = "=="
    GE = ">="
    GT = ">"
    LE = "<="
    LT = "<"
    NE = "!="

def tmpl_equals(lhs: TmplValue, rhs: TmplValue) -> bool:
    match (lhs, rhs):
        case (TmplEmpty(), TmplEmpty()):
            return True
        case (TmplInt(value=a) | TmplDouble(value=a), TmplInt(value=b) | TmplDouble(value=b)):
            return a == b
        case (TmplString(value=a), TmplString(value=b)):
            return a == b
        case (TmplBool(value=a), TmplBool(value=b)):
            return a == b
        case (TmplList(items=items_a), TmplList(items=items_b)):
            return len(items_a) == len(items_b) and all(
                tmpl_equals(a, b) for a, b in zip(items_a, items_b)
            )
        case (TmplMap(slots=slots_a), TmplMap(slots=slots_b)):
            return slots_a.keys() == slots_b.keys() and all(
                tmpl_equals(slots_a[k], slots_b[k]) for k in slots_a
            )
        case (TmplKVPair(key=ka, value=va), TmplKVPair(key=kb, value=vb)):
            return ka == kb and tmpl_equals(va, vb)
        case (TmplCallable(fn=fa), TmplCallable(fn=fb)):
            return fa is fb
        case _:
            return False

def _ordering(lhs: TmplValue, rhs: TmplValue) -> Optional[int]:
    """-1/0/1 for orderable pairs, None when the kinds have no ordering."""
    match (lhs, rhs):
        case (TmplInt(value=a) | TmplDouble(value=a), TmplInt(value=b) | TmplDouble(value=b)):
            # nan is unordered against everything, itself included
            if a != a or b != b:
                return None
            return (a > b) - (a < b)
        case (TmplString(value=a), TmplString(value=b)):
            return (a > b) - (a < b)
        case (TmplBool(value=a), TmplBool(value=b)):
            return int(a) - int(b)
        case (TmplList(items=items_a), TmplList(items=items_b)):
            for a, b in zip(items_a, items_b):
                if tmpl_equals(a, b):
                    continue

                return _ordering(a, b)

            return (len(items_a) > len(items_b)) - (len(items_a) < len(items_b))
        case _:
            return None

def apply_compare(op: CompareOp, lhs: TmplValue, rhs: TmplValue) -> TmplValue:
    """Binary comparison shared with the general expression evaluator.

    Mismatched kinds compare unequal; ordering them yields empty.
    """
    match op:
        case CompareOp.EQ:
            return TmplBool(tmpl_equals(lhs, rhs))
        case CompareOp.NE:
            return TmplBool(not tmpl_equals(lhs, rhs))

    order = _ordering(lhs, rhs)
    if order is None:
        return TmplEmpty()

    match op:
        case CompareOp.LT:
            return TmplBool(order < 0)
        case CompareOp.LE:
            return TmplBool(order <= 0)
        case CompareOp.GT:
            return TmplBool(order > 0)
        case CompareOp.GE:
            return TmplBool(order >= 0)

    raise ValueError(f"Unknown comparator {op}")

def contains(container: TmplValue, item: TmplValue) -> bool:
    match container:
        case TmplList(items=items):
            return any(tmpl_equals(element, item) for element in items)
        case TmplString(value=text):
            return isinstance(item, TmplString) and item.value in text
        case TmplMap(slots=slots):
            return isinstance(item, TmplString) and item.value in slots
        case TmplKVPair(key=key):
            return isinstance(item, TmplString) and item.value == key
        case _:
            return False
