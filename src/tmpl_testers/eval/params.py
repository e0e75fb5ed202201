from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from ..types import ArgumentError, RenderContext, TmplValue
from .expr import Node, eval_node

@dataclass
class CallParams:
    """Raw call-site arguments, in the order the parser produced them."""
    positional: List[Node] = field(default_factory=list)
    named: Dict[str, Node] = field(default_factory=dict)

class ArgExpr:
    """A bound argument sub-evaluator."""
    __slots__ = ('name', 'node')

    def __init__(self, name: str, node: Node):
        self.name = name
        self.node = node

    def evaluate(self, context: RenderContext) -> TmplValue:
        return eval_node(self.node, context)

    def __repr__(self) -> str:
        return f"ArgExpr({self.name}={self.node!r})"

def parse_call_params(tester: str, declared: Mapping[str, bool], params: Optional[CallParams]) -> Dict[str, ArgExpr]:
    """Bind call-site arguments to the declared parameters of a tester.

    Named arguments bind first; positional ones fill the remaining declared
    names in declaration order. Undeclared names, surplus positionals, double
    binding and missing required parameters all raise ArgumentError.
    """
    params = params if params is not None else CallParams()
    bound: Dict[str, ArgExpr] = {}

    for name, node in params.named.items():
        if name not in declared:
            raise ArgumentError(tester, f"unexpected argument '{name}'", name)
        bound[name] = ArgExpr(name, node)

    free = [name for name in declared if name not in bound]

    if len(params.positional) > len(free):
        expected = len(declared)
        given = len(params.positional) + len(params.named)
        raise ArgumentError(tester, f"expects at most {expected} argument(s); got {given}")

    for name, node in zip(free, params.positional):
        bound[name] = ArgExpr(name, node)

    for name, required in declared.items():
        if required and name not in bound:
            raise ArgumentError(tester, f"missing required argument '{name}'", name)

    return bound
