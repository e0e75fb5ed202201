from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple
from typing_extensions import TypeAlias, TypeGuard

# ---------- Value Model ----------

@dataclass
class TmplEmpty:
    def __repr__(self) -> str:
        return "empty"

@dataclass
class TmplBool:
    value: bool
    def __repr__(self) -> str:
        return "true" if self.value else "false"

@dataclass
class TmplString:
    value: str
    def __repr__(self) -> str:
        return f'"{self.value}"'

@dataclass
class TmplInt:
    value: int
    def __repr__(self) -> str:
        return str(self.value)

@dataclass
class TmplDouble:
    value: float
    def __repr__(self) -> str:
        return repr(self.value)

@dataclass
class TmplList:
    items: List['TmplValue']
    def __repr__(self) -> str:
        return "[" + ", ".join(repr(x) for x in self.items) + "]"

@dataclass
class TmplMap:
    slots: Dict[str, 'TmplValue']
    def __repr__(self) -> str:
        pairs = []

        for k, v in self.slots.items():
            pairs.append(f"{k}: {repr(v)}")

        return "{" + ", ".join(pairs) + "}"

@dataclass
class TmplKVPair:
    key: str
    value: 'TmplValue'
    def __repr__(self) -> str:
        return f"{self.key}: {repr(self.value)}"

@dataclass
class TmplCallable:
    fn: Callable[..., Any]
    name: str = "callable"
    def __repr__(self) -> str:
        return f"<callable {self.name}>"

TmplValue: TypeAlias = (
    TmplEmpty
    | TmplBool
    | TmplString
    | TmplInt
    | TmplDouble
    | TmplList
    | TmplMap
    | TmplKVPair
    | TmplCallable
)

_TMPL_VALUE_TYPES: Tuple[type, ...] = (
    TmplEmpty,
    TmplBool,
    TmplString,
    TmplInt,
    TmplDouble,
    TmplList,
    TmplMap,
    TmplKVPair,
    TmplCallable,
)

def is_tmpl_value(value: object) -> TypeGuard[TmplValue]:
    return isinstance(value, _TMPL_VALUE_TYPES)

def to_value(obj: object) -> TmplValue:
    """Convert plain Python data into the template value model."""
    if is_tmpl_value(obj):
        return obj

    if obj is None:
        return TmplEmpty()

    # bool before int: bool is an int subclass
    if isinstance(obj, bool):
        return TmplBool(obj)

    if isinstance(obj, int):
        return TmplInt(obj)

    if isinstance(obj, float):
        return TmplDouble(obj)

    if isinstance(obj, str):
        return TmplString(obj)

    if isinstance(obj, (list, tuple)):
        return TmplList([to_value(item) for item in obj])

    if isinstance(obj, dict):
        slots: Dict[str, TmplValue] = {}

        for key, val in obj.items():
            if not isinstance(key, str):
                raise TemplateTypeError(f"Map keys must be strings, got {type(key).__name__}")
            slots[key] = to_value(val)

        return TmplMap(slots)

    if callable(obj):
        return TmplCallable(obj, getattr(obj, "__name__", "callable"))

    raise TemplateTypeError(f"Cannot convert {type(obj).__name__} to a template value")

# ---------- Render context ----------

class RenderContext:
    """Scoped variable store handed to argument sub-evaluators."""

    def __init__(self, values: Optional[Dict[str, object]]=None, parent: Optional['RenderContext']=None):
        self.parent = parent
        self.vars: Dict[str, TmplValue] = {}

        if values:
            for name, val in values.items():
                self.vars[name] = to_value(val)

    def define(self, name: str, val: object) -> None:
        self.vars[name] = to_value(val)

    def get(self, name: str) -> TmplValue:
        if name in self.vars:
            return self.vars[name]

        if self.parent is not None:
            return self.parent.get(name)

        return TmplEmpty()

    def has(self, name: str) -> bool:
        if name in self.vars:
            return True

        return self.parent is not None and self.parent.has(name)

    def child(self, values: Optional[Dict[str, object]]=None) -> 'RenderContext':
        return RenderContext(values, parent=self)

# ---------- Exceptions ----------

class TemplateRuntimeError(Exception):
    meta: Optional[object]

    def __init__(self, message: str):
        super().__init__(message)
        self.meta = None

    def __str__(self) -> str:  # pragma: no cover - trivial formatting
        msg = super().__str__()

        meta = getattr(self, "meta", None)
        if meta is None:
            return msg

        line = getattr(meta, "line", None)
        col = getattr(meta, "column", None)

        if line is None:
            return msg

        if col is None:
            return f"{msg} (line {line})"

        return f"{msg} (line {line}, col {col})"

class TemplateTypeError(TemplateRuntimeError):
    pass

class TesterNotFound(TemplateRuntimeError):
    def __init__(self, name: str, suggestion: Optional[str]=None):
        message = f"Unknown tester '{name}'"
        if suggestion is not None:
            message += f"; did you mean '{suggestion}'?"

        super().__init__(message)
        self.name = name
        self.suggestion = suggestion

class ArgumentError(TemplateRuntimeError):
    def __init__(self, tester: str, message: str, param: Optional[str]=None):
        super().__init__(f"{tester}: {message}")
        self.tester = tester
        self.param = param

class TesterRegistryError(TemplateRuntimeError):
    pass
