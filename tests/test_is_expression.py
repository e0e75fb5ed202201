from __future__ import annotations

from dataclasses import dataclass

import pytest
from lark import Tree

from tests.support.harness import (
    ArgumentError,
    CallParams,
    RenderContext,
    call,
    lit,
    tok,
    var,
)
from tests.support.harness import TesterNotFound as UnknownTesterError
from tmpl_testers.expression import IsExpression
from tmpl_testers.types import TmplBool, TmplInt

SCENARIOS = [
    pytest.param(lit("hello world"), "startsWith", call("hello"), False, TmplBool(True), id="startswith-hello"),
    pytest.param(lit("hello world"), "startsWith", call("world"), False, TmplBool(False), id="startswith-world"),
    pytest.param(lit(5), "ge", call(3), False, TmplBool(True), id="five-ge-three"),
    pytest.param(lit(5), "lt", call(3), False, TmplBool(False), id="five-lt-three"),
    pytest.param(lit(None), "number", None, False, TmplBool(False), id="empty-not-number"),
    pytest.param(lit(3.14), "number", None, False, TmplBool(True), id="double-is-number"),
    pytest.param(var("missing"), "defined", None, True, TmplBool(True), id="is-not-defined"),
    pytest.param(var("items"), "sequence", None, False, TmplBool(True), id="variable-sequence"),
    pytest.param(var("user"), "mapping", None, False, TmplBool(True), id="variable-mapping"),
    pytest.param(
        Tree("getattr", [var("user"), tok("NAME", "name")]),
        "in",
        CallParams([var("allowed")]),
        False,
        TmplBool(True),
        id="attr-in-variable",
    ),
    pytest.param(var("count"), "odd", None, True, TmplBool(False), id="is-not-odd"),
]


@pytest.mark.parametrize("base, name, params, negated, expected", SCENARIOS)
def test_is_expression(base, name: str, params, negated: bool, expected) -> None:
    context = RenderContext({
        "items": [1, 2],
        "user": {"name": "ada"},
        "allowed": ["ada", "bob"],
        "count": 7,
    })
    expr = IsExpression(base, name, params, negated=negated)
    assert expr.evaluate(context) == expected


def test_reused_across_renders() -> None:
    expr = IsExpression(var("n"), "even")
    results = [expr.evaluate(RenderContext({"n": n})).value for n in range(4)]
    assert results == [True, False, True, False]


@dataclass
class _Meta:
    line: int
    column: int


def test_unknown_tester_fails_at_compile_time() -> None:
    with pytest.raises(UnknownTesterError) as excinfo:
        IsExpression(var("x"), "nosuchtest", meta=_Meta(3, 14))
    assert str(excinfo.value).endswith("(line 3, col 14)")


def test_bad_arguments_fail_at_compile_time() -> None:
    with pytest.raises(ArgumentError, match="startsWith: missing required argument 'str'"):
        IsExpression(var("x"), "startsWith", CallParams())


def test_repr() -> None:
    expr = IsExpression(TmplInt(1), "defined", negated=True)
    assert repr(expr) == "<1 is not defined>"
