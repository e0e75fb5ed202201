from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from lark import Token, Tree

from ..types import (
    RenderContext,
    TemplateTypeError,
    TmplBool,
    TmplDouble,
    TmplEmpty,
    TmplInt,
    TmplKVPair,
    TmplList,
    TmplMap,
    TmplString,
    TmplValue,
    is_tmpl_value,
)

# Argument nodes as a lark-built parser emits them, or a pre-evaluated constant.
Node = Union[Tree, Token, TmplValue]

def token_kind(node: Any) -> Optional[str]:
    if not isinstance(node, Token):
        return None
    return str(node.type)

def tree_label(node: Any) -> Optional[str]:
    return str(node.data) if isinstance(node, Tree) else None

def token_number(token: Token) -> TmplValue:
    raw = str(token.value).replace("_", "")

    try:
        return TmplInt(int(raw))
    except ValueError:
        pass

    try:
        return TmplDouble(float(raw))
    except ValueError:
        raise TemplateTypeError(f"Malformed number literal {token.value!r}") from None

def token_string(token: Token) -> TmplString:
    raw = str(token.value)

    if len(raw) >= 2 and ((raw[0] == '"' and raw[-1] == '"') or (raw[0] == "'" and raw[-1] == "'")):
        raw = raw[1:-1]

    return TmplString(raw)

def eval_node(node: Node, context: RenderContext) -> TmplValue:
    if is_tmpl_value(node):
        return node

    if isinstance(node, Token):
        return _eval_token(node, context)

    if isinstance(node, Tree):
        return _eval_tree(node, context)

    raise TemplateTypeError(f"Unsupported argument node {type(node).__name__}")

def _eval_token(token: Token, context: RenderContext) -> TmplValue:
    match token_kind(token):
        case 'STRING':
            return token_string(token)
        case 'NUMBER':
            return token_number(token)
        case 'TRUE':
            return TmplBool(True)
        case 'FALSE':
            return TmplBool(False)
        case 'NONE':
            return TmplEmpty()
        case 'NAME':
            return context.get(str(token.value))
        case kind:
            raise TemplateTypeError(f"Unsupported token {kind} in argument expression")

def _eval_tree(tree: Tree, context: RenderContext) -> TmplValue:
    children: List[Any] = list(tree.children)

    match tree_label(tree):
        case 'list':
            return TmplList([eval_node(child, context) for child in children])
        case 'dict':
            slots: Dict[str, TmplValue] = {}

            for pair in children:
                kv = _eval_pair(pair, context)
                slots[kv.key] = kv.value

            return TmplMap(slots)
        case 'pair':
            return _eval_pair(tree, context)
        case 'getattr':
            obj_node, name_node = children
            return _lookup(eval_node(obj_node, context), str(name_node.value))
        case 'getitem':
            obj_node, index_node = children
            return _index(eval_node(obj_node, context), eval_node(index_node, context))
        case label:
            raise TemplateTypeError(f"Unsupported node '{label}' in argument expression")

def _eval_pair(node: Any, context: RenderContext) -> TmplKVPair:
    if tree_label(node) != 'pair' or len(node.children) != 2:
        raise TemplateTypeError("Dict entries must be key/value pairs")

    key_node, value_node = node.children

    if token_kind(key_node) == 'NAME':
        key = str(key_node.value)
    else:
        key_val = eval_node(key_node, context)
        if not isinstance(key_val, TmplString):
            raise TemplateTypeError("Dict keys must be strings")
        key = key_val.value

    return TmplKVPair(key, eval_node(value_node, context))

def _lookup(obj: TmplValue, name: str) -> TmplValue:
    if isinstance(obj, TmplMap):
        return obj.slots.get(name, TmplEmpty())

    if isinstance(obj, TmplKVPair):
        if name == 'key':
            return TmplString(obj.key)
        if name == 'value':
            return obj.value

    return TmplEmpty()

def _index(obj: TmplValue, index: TmplValue) -> TmplValue:
    if isinstance(obj, TmplMap) and isinstance(index, TmplString):
        return obj.slots.get(index.value, TmplEmpty())

    if isinstance(obj, TmplList) and isinstance(index, TmplInt):
        try:
            return obj.items[index.value]
        except IndexError:
            return TmplEmpty()

    if isinstance(obj, TmplString) and isinstance(index, TmplInt):
        try:
            return TmplString(obj.value[index.value])
        except IndexError:
            return TmplEmpty()

    return _lookup(obj, index.value) if isinstance(index, TmplString) else TmplEmpty()
