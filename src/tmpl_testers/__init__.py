"""Named `is`-test predicates for a template expression evaluator."""

from .eval.compare import CompareOp, apply_compare
from .eval.convert import to_bool, to_string
from .eval.params import ArgExpr, CallParams, parse_call_params
from .expression import IsExpression
from .kinds import ValueKind, classify
from .runtime import Tester, TesterFactory, create_tester, init_testers, lookup, register_tester, tester_names
from .types import (
    ArgumentError,
    RenderContext,
    TemplateRuntimeError,
    TemplateTypeError,
    TesterNotFound,
    TesterRegistryError,
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
    to_value,
)

__all__ = [
    "ArgExpr",
    "ArgumentError",
    "CallParams",
    "CompareOp",
    "IsExpression",
    "RenderContext",
    "TemplateRuntimeError",
    "TemplateTypeError",
    "Tester",
    "TesterFactory",
    "TesterNotFound",
    "TesterRegistryError",
    "TmplBool",
    "TmplCallable",
    "TmplDouble",
    "TmplEmpty",
    "TmplInt",
    "TmplKVPair",
    "TmplList",
    "TmplMap",
    "TmplString",
    "TmplValue",
    "ValueKind",
    "apply_compare",
    "classify",
    "create_tester",
    "init_testers",
    "lookup",
    "parse_call_params",
    "register_tester",
    "tester_names",
    "to_bool",
    "to_string",
    "to_value",
]
