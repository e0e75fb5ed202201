from __future__ import annotations

import pytest
from lark import Token, Tree

from tests.support.harness import ArgumentError, CallParams, RenderContext, lit, tok, var
from tmpl_testers.eval.expr import eval_node
from tmpl_testers.eval.params import ArgExpr, parse_call_params
from tmpl_testers.types import (
    TemplateTypeError,
    TmplBool,
    TmplDouble,
    TmplEmpty,
    TmplInt,
    TmplKVPair,
    TmplList,
    TmplMap,
    TmplString,
)

DECLARED = {"a": True, "b": True}


def test_positional_binding_follows_declaration_order() -> None:
    bound = parse_call_params("t", DECLARED, CallParams([lit(1), lit(2)]))
    ctx = RenderContext()
    assert bound["a"].evaluate(ctx) == TmplInt(1)
    assert bound["b"].evaluate(ctx) == TmplInt(2)


def test_named_then_positional() -> None:
    bound = parse_call_params("t", DECLARED, CallParams([lit(1)], {"a": lit(9)}))
    ctx = RenderContext()
    assert bound["a"].evaluate(ctx) == TmplInt(9)
    assert bound["b"].evaluate(ctx) == TmplInt(1)


@pytest.mark.parametrize(
    "params, message",
    [
        pytest.param(CallParams(), "missing required argument 'a'", id="missing-all"),
        pytest.param(CallParams([lit(1)]), "missing required argument 'b'", id="missing-second"),
        pytest.param(CallParams([lit(1), lit(2), lit(3)]), "at most 2", id="too-many"),
        pytest.param(CallParams(named={"c": lit(1)}), "unexpected argument 'c'", id="unknown-named"),
        pytest.param(CallParams([lit(1), lit(2)], {"a": lit(3)}), "at most 2", id="bound-twice"),
    ],
)
def test_binding_errors(params: CallParams, message: str) -> None:
    with pytest.raises(ArgumentError, match=message) as excinfo:
        parse_call_params("t", DECLARED, params)
    assert excinfo.value.tester == "t"


def test_no_declared_params_accepts_none() -> None:
    assert parse_call_params("t", {}, None) == {}
    assert parse_call_params("t", {}, CallParams()) == {}


def test_optional_param_may_be_absent() -> None:
    bound = parse_call_params("t", {"a": True, "b": False}, CallParams([lit(1)]))
    assert set(bound) == {"a"}


def test_arg_expr_repr() -> None:
    assert repr(ArgExpr("b", TmplInt(1))) == "ArgExpr(b=1)"


NODE_CASES = [
    pytest.param(tok("STRING", '"hi"'), TmplString("hi"), id="string-double-quoted"),
    pytest.param(tok("STRING", "'hi'"), TmplString("hi"), id="string-single-quoted"),
    pytest.param(tok("NUMBER", "42"), TmplInt(42), id="number-int"),
    pytest.param(tok("NUMBER", "1_000"), TmplInt(1000), id="number-underscore"),
    pytest.param(tok("NUMBER", "2.5"), TmplDouble(2.5), id="number-double"),
    pytest.param(tok("NUMBER", "1e3"), TmplDouble(1000.0), id="number-exponent"),
    pytest.param(tok("TRUE", "true"), TmplBool(True), id="true"),
    pytest.param(tok("FALSE", "false"), TmplBool(False), id="false"),
    pytest.param(tok("NONE", "none"), TmplEmpty(), id="none"),
    pytest.param(var("user"), TmplMap({"name": TmplString("ada"), "tags": TmplList([TmplString("x")])}), id="name"),
    pytest.param(var("nobody"), TmplEmpty(), id="name-undefined"),
    pytest.param(Tree("list", [lit(1), lit("a")]), TmplList([TmplInt(1), TmplString("a")]), id="list"),
    pytest.param(
        Tree("dict", [Tree("pair", [var("k"), lit(1)]), Tree("pair", [lit("s"), lit(2)])]),
        TmplMap({"k": TmplInt(1), "s": TmplInt(2)}),
        id="dict",
    ),
    pytest.param(Tree("pair", [var("k"), lit(1)]), TmplKVPair("k", TmplInt(1)), id="pair"),
    pytest.param(Tree("getattr", [var("user"), tok("NAME", "name")]), TmplString("ada"), id="getattr"),
    pytest.param(Tree("getattr", [var("user"), tok("NAME", "age")]), TmplEmpty(), id="getattr-missing"),
    pytest.param(Tree("getattr", [lit(5), tok("NAME", "x")]), TmplEmpty(), id="getattr-non-map"),
    pytest.param(Tree("getitem", [var("user"), lit("name")]), TmplString("ada"), id="getitem-key"),
    pytest.param(
        Tree("getitem", [Tree("getattr", [var("user"), tok("NAME", "tags")]), lit(0)]),
        TmplString("x"),
        id="getitem-index",
    ),
    pytest.param(
        Tree("getitem", [Tree("getattr", [var("user"), tok("NAME", "tags")]), lit(5)]),
        TmplEmpty(),
        id="getitem-out-of-range",
    ),
    pytest.param(Tree("getitem", [lit("abc"), lit(-1)]), TmplString("c"), id="getitem-string"),
    pytest.param(
        Tree("getattr", [Tree("pair", [var("k"), lit(1)]), tok("NAME", "key")]),
        TmplString("k"),
        id="getattr-pair-key",
    ),
    pytest.param(TmplInt(7), TmplInt(7), id="constant"),
]


@pytest.mark.parametrize("node, expected", NODE_CASES)
def test_eval_node(node, expected) -> None:
    context = RenderContext({"user": {"name": "ada", "tags": ["x"]}})
    assert eval_node(node, context) == expected


@pytest.mark.parametrize(
    "node",
    [
        pytest.param(Token("PLUS", "+"), id="unknown-token"),
        pytest.param(Tree("call", []), id="unknown-tree"),
        pytest.param(tok("NUMBER", "abc"), id="bad-number"),
        pytest.param(Tree("dict", [lit(1)]), id="dict-non-pair"),
        pytest.param(Tree("dict", [Tree("pair", [lit(1), lit(2)])]), id="dict-non-string-key"),
        pytest.param(object(), id="foreign-object"),
    ],
)
def test_eval_node_rejects(node) -> None:
    with pytest.raises(TemplateTypeError):
        eval_node(node, RenderContext())


def test_context_scoping() -> None:
    outer = RenderContext({"a": 1, "b": 2})
    inner = outer.child({"a": "shadow"})
    assert eval_node(var("a"), inner) == TmplString("shadow")
    assert eval_node(var("b"), inner) == TmplInt(2)
    assert inner.has("b") and not inner.has("c")
    assert eval_node(var("a"), outer) == TmplInt(1)
