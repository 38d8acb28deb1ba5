"""JSON serialization/deserialization for the Monkey AST.

This module converts between AST dataclasses and plain Python dict/list
structures suitable for JSON encoding. Every node type round-trips, and
the rebuilt tree renders to the same canonical text as the original.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .ast import (
    ArrayLiteral,
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    ExpressionStatement,
    FloatLiteral,
    FunctionLiteral,
    Identifier,
    IfExpression,
    IndexExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    Node,
    PrefixExpression,
    Program,
    ReturnStatement,
    StringLiteral,
    WhileExpression,
)
from .errors import MonkeyError
from .tokens import Token, TokenType


def token_to_obj(t: Token) -> Dict[str, Any]:
    return {"type": t.type.name, "literal": t.literal, "line": t.line, "column": t.column}


def token_from_obj(o: Dict[str, Any]) -> Token:
    if not isinstance(o, dict):
        raise MonkeyError(f"malformed token object: {o!r}")
    try:
        token_type = TokenType[o["type"]]
    except (KeyError, TypeError):
        raise MonkeyError(f"unknown token type {o.get('type')!r}")
    return Token(token_type, o.get("literal", ""), o.get("line", 0), o.get("column", 0))


def _node(kind: str, node: Node, **fields: Any) -> Dict[str, Any]:
    obj = {"type": kind, "token": token_to_obj(node.token)}
    obj.update(fields)
    return obj


def ast_to_obj(node: Optional[Node]) -> Any:
    if node is None:
        return None
    if isinstance(node, Program):
        return _node("Program", node, statements=[ast_to_obj(s) for s in node.statements])
    if isinstance(node, LetStatement):
        return _node("LetStatement", node, name=ast_to_obj(node.name), value=ast_to_obj(node.value))
    if isinstance(node, ReturnStatement):
        return _node("ReturnStatement", node, value=ast_to_obj(node.value))
    if isinstance(node, ExpressionStatement):
        return _node("ExpressionStatement", node, expression=ast_to_obj(node.expression))
    if isinstance(node, BlockStatement):
        return _node("BlockStatement", node, statements=[ast_to_obj(s) for s in node.statements])
    if isinstance(node, Identifier):
        return _node("Identifier", node, value=node.value)
    if isinstance(node, IntegerLiteral):
        return _node("IntegerLiteral", node, value=node.value)
    if isinstance(node, FloatLiteral):
        return _node("FloatLiteral", node, value=node.value)
    if isinstance(node, BooleanLiteral):
        return _node("BooleanLiteral", node, value=node.value)
    if isinstance(node, StringLiteral):
        return _node("StringLiteral", node, value=node.value)
    if isinstance(node, ArrayLiteral):
        return _node("ArrayLiteral", node, elements=[ast_to_obj(e) for e in node.elements])
    if isinstance(node, PrefixExpression):
        return _node("PrefixExpression", node, operator=node.operator, right=ast_to_obj(node.right))
    if isinstance(node, InfixExpression):
        return _node(
            "InfixExpression", node,
            left=ast_to_obj(node.left),
            operator=node.operator,
            right=ast_to_obj(node.right),
        )
    if isinstance(node, IndexExpression):
        return _node("IndexExpression", node, left=ast_to_obj(node.left), index=ast_to_obj(node.index))
    if isinstance(node, IfExpression):
        return _node(
            "IfExpression", node,
            condition=ast_to_obj(node.condition),
            consequence=ast_to_obj(node.consequence),
            alternative=ast_to_obj(node.alternative),
        )
    if isinstance(node, WhileExpression):
        return _node("WhileExpression", node, condition=ast_to_obj(node.condition), body=ast_to_obj(node.body))
    if isinstance(node, FunctionLiteral):
        return _node(
            "FunctionLiteral", node,
            parameters=[ast_to_obj(p) for p in node.parameters],
            body=ast_to_obj(node.body),
        )
    if isinstance(node, CallExpression):
        return _node(
            "CallExpression", node,
            function=ast_to_obj(node.function),
            arguments=[ast_to_obj(a) for a in node.arguments],
        )

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def _list(items: List[Any]) -> List[Any]:
    return [ast_from_obj(i) for i in items]


def ast_from_obj(o: Any) -> Any:
    if o is None:
        return None
    if not isinstance(o, dict) or "type" not in o:
        raise MonkeyError(f"malformed AST object: {o!r}")

    t = o["type"]
    try:
        token = token_from_obj(o["token"])
        if t == "Program":
            return Program(token, _list(o["statements"]))
        if t == "LetStatement":
            return LetStatement(token, ast_from_obj(o["name"]), ast_from_obj(o["value"]))
        if t == "ReturnStatement":
            return ReturnStatement(token, ast_from_obj(o["value"]))
        if t == "ExpressionStatement":
            return ExpressionStatement(token, ast_from_obj(o["expression"]))
        if t == "BlockStatement":
            return BlockStatement(token, _list(o["statements"]))
        if t == "Identifier":
            return Identifier(token, o["value"])
        if t == "IntegerLiteral":
            return IntegerLiteral(token, int(o["value"]))
        if t == "FloatLiteral":
            return FloatLiteral(token, float(o["value"]))
        if t == "BooleanLiteral":
            return BooleanLiteral(token, bool(o["value"]))
        if t == "StringLiteral":
            return StringLiteral(token, o["value"])
        if t == "ArrayLiteral":
            return ArrayLiteral(token, _list(o["elements"]))
        if t == "PrefixExpression":
            return PrefixExpression(token, o["operator"], ast_from_obj(o["right"]))
        if t == "InfixExpression":
            return InfixExpression(token, ast_from_obj(o["left"]), o["operator"], ast_from_obj(o["right"]))
        if t == "IndexExpression":
            return IndexExpression(token, ast_from_obj(o["left"]), ast_from_obj(o["index"]))
        if t == "IfExpression":
            return IfExpression(
                token,
                ast_from_obj(o["condition"]),
                ast_from_obj(o["consequence"]),
                ast_from_obj(o.get("alternative")),
            )
        if t == "WhileExpression":
            return WhileExpression(token, ast_from_obj(o["condition"]), ast_from_obj(o["body"]))
        if t == "FunctionLiteral":
            return FunctionLiteral(token, _list(o["parameters"]), ast_from_obj(o["body"]))
        if t == "CallExpression":
            return CallExpression(token, ast_from_obj(o["function"]), _list(o["arguments"]))
    except KeyError as e:
        raise MonkeyError(f"{t} is missing field {e.args[0]!r}")
    except (TypeError, ValueError) as e:
        raise MonkeyError(f"{t} has a malformed field: {e}")

    raise MonkeyError(f"Unsupported node type for deserialization: {t}")
