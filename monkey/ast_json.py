"""JSON serialization/deserialization for Monkey ASTs.

This module converts between Monkey AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Every node type
round-trips; source tokens are not kept, so `token_literal()` on a loaded
node returns an empty string.
"""

from __future__ import annotations

from typing import Any

from .ast import (
    Program,
    LetStatement,
    ReturnStatement,
    ExpressionStatement,
    BlockStatement,
    Identifier,
    IntegerLiteral,
    BooleanLiteral,
    StringLiteral,
    ArrayLiteral,
    HashLiteral,
    PrefixExpression,
    InfixExpression,
    IfExpression,
    FunctionLiteral,
    CallExpression,
    IndexExpression,
)


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None

    if isinstance(node, Program):
        return {"type": "Program", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, LetStatement):
        return {"type": "LetStatement", "name": ast_to_obj(node.name), "value": ast_to_obj(node.value)}
    if isinstance(node, ReturnStatement):
        return {"type": "ReturnStatement", "value": ast_to_obj(node.value)}
    if isinstance(node, ExpressionStatement):
        return {"type": "ExpressionStatement", "expression": ast_to_obj(node.expression)}
    if isinstance(node, BlockStatement):
        return {"type": "BlockStatement", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, Identifier):
        return {"type": "Identifier", "name": node.name}
    if isinstance(node, IntegerLiteral):
        return {"type": "IntegerLiteral", "value": node.value}
    if isinstance(node, BooleanLiteral):
        return {"type": "BooleanLiteral", "value": node.value}
    if isinstance(node, StringLiteral):
        return {"type": "StringLiteral", "value": node.value}
    if isinstance(node, ArrayLiteral):
        return {"type": "ArrayLiteral", "elements": [ast_to_obj(e) for e in node.elements]}
    if isinstance(node, HashLiteral):
        return {"type": "HashLiteral", "pairs": [[ast_to_obj(k), ast_to_obj(v)] for (k, v) in node.pairs]}
    if isinstance(node, PrefixExpression):
        return {"type": "PrefixExpression", "operator": node.operator, "operand": ast_to_obj(node.operand)}
    if isinstance(node, InfixExpression):
        return {
            "type": "InfixExpression",
            "left": ast_to_obj(node.left),
            "operator": node.operator,
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, IfExpression):
        return {
            "type": "IfExpression",
            "condition": ast_to_obj(node.condition),
            "consequence": ast_to_obj(node.consequence),
            "alternative": ast_to_obj(node.alternative),
        }
    if isinstance(node, FunctionLiteral):
        return {
            "type": "FunctionLiteral",
            "parameters": [ast_to_obj(p) for p in node.parameters],
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, CallExpression):
        return {
            "type": "CallExpression",
            "function": ast_to_obj(node.function),
            "arguments": [ast_to_obj(a) for a in node.arguments],
        }
    if isinstance(node, IndexExpression):
        return {"type": "IndexExpression", "left": ast_to_obj(node.left), "index": ast_to_obj(node.index)}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Program":
        return Program(statements=[ast_from_obj(s) for s in obj["statements"]])
    if t == "LetStatement":
        return LetStatement(name=ast_from_obj(obj["name"]), value=ast_from_obj(obj.get("value")))
    if t == "ReturnStatement":
        return ReturnStatement(value=ast_from_obj(obj.get("value")))
    if t == "ExpressionStatement":
        return ExpressionStatement(expression=ast_from_obj(obj.get("expression")))
    if t == "BlockStatement":
        return BlockStatement(statements=[ast_from_obj(s) for s in obj["statements"]])
    if t == "Identifier":
        return Identifier(name=obj["name"])
    if t == "IntegerLiteral":
        return IntegerLiteral(value=int(obj["value"]))
    if t == "BooleanLiteral":
        return BooleanLiteral(value=bool(obj["value"]))
    if t == "StringLiteral":
        return StringLiteral(value=obj["value"])
    if t == "ArrayLiteral":
        return ArrayLiteral(elements=[ast_from_obj(e) for e in obj["elements"]])
    if t == "HashLiteral":
        return HashLiteral(pairs=[(ast_from_obj(k), ast_from_obj(v)) for (k, v) in obj["pairs"]])
    if t == "PrefixExpression":
        return PrefixExpression(operator=obj["operator"], operand=ast_from_obj(obj["operand"]))
    if t == "InfixExpression":
        return InfixExpression(
            left=ast_from_obj(obj["left"]),
            operator=obj["operator"],
            right=ast_from_obj(obj["right"]),
        )
    if t == "IfExpression":
        return IfExpression(
            condition=ast_from_obj(obj["condition"]),
            consequence=ast_from_obj(obj["consequence"]),
            alternative=ast_from_obj(obj.get("alternative")),
        )
    if t == "FunctionLiteral":
        return FunctionLiteral(
            parameters=[ast_from_obj(p) for p in obj["parameters"]],
            body=ast_from_obj(obj["body"]),
        )
    if t == "CallExpression":
        return CallExpression(
            function=ast_from_obj(obj["function"]),
            arguments=[ast_from_obj(a) for a in obj["arguments"]],
        )
    if t == "IndexExpression":
        return IndexExpression(left=ast_from_obj(obj["left"]), index=ast_from_obj(obj["index"]))

    raise ValueError(f"Unknown AST node type: {t}")
