from __future__ import annotations

from typing import Optional

from .eval.expr import Node, eval_node
from .eval.params import CallParams
from .runtime import Tester, create_tester
from .types import RenderContext, TemplateRuntimeError, TmplBool

class IsExpression:
    """Compiled form of `base is name(args...)` / `base is not name(args...)`.

    The tester is resolved and its arguments bound here, so unknown names and
    bad arguments are reported when the template is compiled rather than on
    every render.
    """
    __slots__ = ('base', 'tester', 'negated')

    def __init__(self, base: Node, name: str, params: Optional[CallParams]=None,
                 negated: bool=False, meta: Optional[object]=None):
        self.base = base
        self.negated = negated

        try:
            self.tester: Tester = create_tester(name, params)
        except TemplateRuntimeError as err:
            if err.meta is None:
                err.meta = meta
            raise

    def evaluate(self, context: RenderContext) -> TmplBool:
        result = self.tester.test(eval_node(self.base, context), context)
        return TmplBool(result != self.negated)

    def __repr__(self) -> str:
        op = "is not" if self.negated else "is"
        return f"<{self.base!r} {op} {self.tester.name}>"
