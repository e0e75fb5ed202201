"""Tester families registered into the runtime registry on import."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

from typing_extensions import assert_never

from .eval.compare import CompareOp, apply_compare, contains
from .eval.convert import as_integral, to_bool, to_string
from .eval.params import ArgExpr, CallParams, parse_call_params
from .kinds import ITERABLE_KINDS, MAPPING_KINDS, NUMBER_KINDS, ValueKind, classify
from .runtime import Tester, register_tester
from .types import RenderContext, TmplString, TmplValue

class Comparator(Tester):
    __slots__ = ('op', '_b')

    def __init__(self, name: str, params: Optional[CallParams], op: CompareOp):
        super().__init__(name)
        self.op = op
        self._b = parse_call_params(name, {'b': True}, params)['b']

    def test(self, base: TmplValue, context: RenderContext) -> bool:
        rhs = self._b.evaluate(context)
        return to_bool(apply_compare(self.op, base, rhs))

for _op, _names in (
    (CompareOp.EQ, ("eq", "==", "equalto")),
    (CompareOp.GE, ("ge", ">=")),
    (CompareOp.GT, ("gt", ">", "greaterthan")),
    (CompareOp.LE, ("le", "<=")),
    (CompareOp.LT, ("lt", "<", "lessthan")),
    (CompareOp.NE, ("ne", "!=")),
):
    register_tester(*_names, config=_op)(Comparator)

@register_tester("startsWith")
class StartsWith(Tester):
    __slots__ = ('_needle',)

    def __init__(self, name: str, params: Optional[CallParams]):
        super().__init__(name)
        self._needle = parse_call_params(name, {'str': True}, params)['str']

    def test(self, base: TmplValue, context: RenderContext) -> bool:
        needle = to_string(self._needle.evaluate(context))
        return to_string(base).startswith(needle)

@register_tester("endsWith")
class EndsWith(Tester):
    __slots__ = ('_needle',)

    def __init__(self, name: str, params: Optional[CallParams]):
        super().__init__(name)
        self._needle = parse_call_params(name, {'str': True}, params)['str']

    def test(self, base: TmplValue, context: RenderContext) -> bool:
        needle = to_string(self._needle.evaluate(context))
        return to_string(base).endswith(needle)

@register_tester("divisibleby")
class DivisibleBy(Tester):
    __slots__ = ('_num',)

    def __init__(self, name: str, params: Optional[CallParams]):
        super().__init__(name)
        self._num = parse_call_params(name, {'num': True}, params)['num']

    def test(self, base: TmplValue, context: RenderContext) -> bool:
        lhs = as_integral(base)
        rhs = as_integral(self._num.evaluate(context))

        if lhs is None or not rhs:
            return False

        return lhs % rhs == 0

class KindMode(Enum):
    DEFINED = "defined"
    UNDEFINED = "undefined"
    ITERABLE = "iterable"
    MAPPING = "mapping"
    NUMBER = "number"
    SEQUENCE = "sequence"
    STRING = "string"
    EVEN = "even"
    ODD = "odd"
    LOWER = "lower"
    UPPER = "upper"
    IN = "in"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    CALLABLE = "callable"

# Only membership needs an operand.
_KIND_PARAMS: Dict[KindMode, Dict[str, bool]] = {
    KindMode.IN: {'seq': True},
}

class KindTester(Tester):
    __slots__ = ('mode', '_args')

    def __init__(self, name: str, params: Optional[CallParams], mode: KindMode):
        super().__init__(name)
        self.mode = mode
        self._args: Dict[str, ArgExpr] = parse_call_params(name, _KIND_PARAMS.get(mode, {}), params)

    def test(self, base: TmplValue, context: RenderContext) -> bool:
        kind = classify(base)

        match self.mode:
            case KindMode.DEFINED:
                return kind is not ValueKind.EMPTY
            case KindMode.UNDEFINED:
                return kind is ValueKind.EMPTY
            case KindMode.ITERABLE:
                return kind in ITERABLE_KINDS
            case KindMode.MAPPING:
                return kind in MAPPING_KINDS
            case KindMode.NUMBER:
                return kind in NUMBER_KINDS
            case KindMode.SEQUENCE:
                return kind is ValueKind.LIST
            case KindMode.STRING:
                return kind is ValueKind.STRING
            case KindMode.EVEN:
                num = as_integral(base)
                return num is not None and num % 2 == 0
            case KindMode.ODD:
                num = as_integral(base)
                return num is not None and num % 2 == 1
            case KindMode.LOWER:
                return isinstance(base, TmplString) and base.value.islower()
            case KindMode.UPPER:
                return isinstance(base, TmplString) and base.value.isupper()
            case KindMode.IN:
                return contains(self._args['seq'].evaluate(context), base)
            case KindMode.BOOLEAN:
                return kind is ValueKind.BOOLEAN
            case KindMode.INTEGER:
                return kind is ValueKind.INTEGER
            case KindMode.FLOAT:
                return kind is ValueKind.DOUBLE
            case KindMode.CALLABLE:
                return kind is ValueKind.CALLABLE
            case _:
                assert_never(self.mode)

for _mode in KindMode:
    register_tester(_mode.value, config=_mode)(KindTester)
