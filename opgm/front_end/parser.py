"""Parser for the s-expression query language."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from opgm.front_end.ast import (
    LABEL_MAX,
    LABEL_MIN,
    VID_MAX,
    VID_MIN,
    Ast,
    Expr,
    GispError,
    Op,
)

_TOKEN_RE = re.compile(r"\(|\)|[^\s()]+")
_IDENT_RE = re.compile(r"u(\d+)")
_INT_RE = re.compile(r"-?\d+")

_OPERATORS = {op.symbol: op for op in Op if not op.is_leaf}
_OPERATORS["%"] = Op.MOD


@dataclass
class _Atom:
    text: str
    pos: int


@dataclass
class _List:
    items: list
    pos: int


_Node = Union[_Atom, _List]


def _read(text: str) -> _Node:
    tokens = [(m.group(), m.start()) for m in _TOKEN_RE.finditer(text)]
    if not tokens:
        raise GispError("unexpected end of input", len(text))
    node, index = _read_node(tokens, 0)
    if index != len(tokens):
        raise GispError("unexpected token", tokens[index][1])
    return node


def _read_node(tokens: list, index: int) -> tuple[_Node, int]:
    token, pos = tokens[index]
    if token == ")":
        raise GispError("unexpected ')'", pos)
    if token != "(":
        return _Atom(token, pos), index + 1
    items = []
    index += 1
    while True:
        if index >= len(tokens):
            raise GispError("unclosed '('", pos)
        if tokens[index][0] == ")":
            return _List(items, pos), index + 1
        item, index = _read_node(tokens, index)
        items.append(item)


def _ranged(value: int, low: int, high: int, pos: int) -> int:
    if not low <= value <= high:
        raise GispError("number out of range", pos)
    return value


def _ident(node: _Node) -> int:
    match = _IDENT_RE.fullmatch(node.text) if isinstance(node, _Atom) else None
    if match is None:
        raise GispError("expected identifier", node.pos)
    return _ranged(int(match.group(1)), VID_MIN, VID_MAX, node.pos)


def _label(node: _Node) -> int:
    if not (isinstance(node, _Atom) and _INT_RE.fullmatch(node.text)):
        raise GispError("expected label", node.pos)
    return _ranged(int(node.text), LABEL_MIN, LABEL_MAX, node.pos)


def _tuple_item(node: _Node, size: int) -> list:
    if not isinstance(node, _List) or len(node.items) != size:
        raise GispError(f"expected a list of {size} items", node.pos)
    return node.items


def _parse_vertices(items: list) -> list:
    vertices = []
    for item in items:
        vid, vlabel = _tuple_item(item, 2)
        vertices.append((_ident(vid), _label(vlabel)))
    return vertices


def _parse_links(items: list) -> list:
    links = []
    for item in items:
        src, dst, elabel = _tuple_item(item, 3)
        links.append((_ident(src), _ident(dst), _label(elabel)))
    return links


def _parse_expr(node: _Node) -> Expr:
    if isinstance(node, _Atom):
        if _IDENT_RE.fullmatch(node.text):
            return Expr.vid(_ident(node))
        if node.text == "#t":
            return Expr.bool(True)
        if node.text == "#f":
            return Expr.bool(False)
        if _INT_RE.fullmatch(node.text):
            return Expr.int(_ranged(int(node.text), VID_MIN, VID_MAX, node.pos))
        raise GispError("expected expression", node.pos)
    if not node.items or not isinstance(node.items[0], _Atom):
        raise GispError("expected operator", node.pos)
    op = _OPERATORS.get(node.items[0].text)
    if op is None:
        raise GispError("unknown operator", node.items[0].pos)
    args = [_parse_expr(arg) for arg in node.items[1:]]
    if op is Op.NOT:
        if len(args) != 1:
            raise GispError("'not' takes one argument", node.pos)
        return Expr.negate(args[0])
    if len(args) != 2:
        raise GispError(f"'{op.symbol}' takes two arguments", node.pos)
    return Expr.binary(op, *args)


def _head(node: _Node) -> str:
    if isinstance(node, _List) and node.items and isinstance(node.items[0], _Atom):
        return node.items[0].text
    raise GispError("expected statement", node.pos)


def parse(text: str) -> Ast:
    """Parse a ``(match ...)`` query into an :class:`Ast`."""
    root = _read(text)
    if _head(root) != "match":
        raise GispError("expected '(match ...)'", root.pos)
    ast = Ast()
    for stat in root.items[1:]:
        head = _head(stat)
        body = stat.items[1:]
        if head == "vertices":
            ast.vertices = _parse_vertices(body)
        elif head == "arcs":
            if ast.arcs:
                raise GispError("unexpected", stat.pos)
            ast.arcs = _parse_links(body)
        elif head == "edges":
            if ast.edges:
                raise GispError("unexpected", stat.pos)
            ast.edges = _parse_links(body)
        elif head == "where":
            if not ast.arcs and not ast.edges:
                raise GispError("unexpected", stat.pos)
            if len(body) != 1:
                raise GispError("'where' takes one expression", stat.pos)
            ast.constraint = _parse_expr(body[0])
        else:
            raise GispError("unknown statement", stat.pos)
    return ast


def expr_parse(text: str) -> Expr:
    """Parse a single constraint expression."""
    return _parse_expr(_read(text))