"""Tree-walking evaluator for the Monkey language.

`Evaluator.evaluate` dispatches on the AST node class and returns a
runtime `Object`. Failures are not Python exceptions: they are `Error`
values that stop the statement list, argument list or expression they
occur in and travel upward unchanged until they become the program's
result. `return` works the same way through `ReturnValue` wrappers,
which block evaluation passes through untouched and function application
unwraps.
"""

from __future__ import annotations

from typing import List, Optional

from .ast import (
    Node, Program, BlockStatement, ExpressionStatement, LetStatement, ReturnStatement,
    Identifier, IntegerLiteral, BooleanLiteral, StringLiteral, ArrayLiteral, HashLiteral,
    PrefixExpression, InfixExpression, IfExpression, FunctionLiteral, CallExpression,
    IndexExpression, Expression,
)
from .builtin_functions import BUILTINS
from .environment import Environment
from .parser import parse_program
from .types import (
    NULL, FALSE, TRUE, Array, Builtin, Error, Function, Hash, HashPair, Hashable,
    Integer, Object, ReturnValue, String, is_signal, is_truthy, native_bool_to_boolean,
    wrap_int64,
)


class Evaluator:
    """Evaluates Monkey ASTs, optionally writing a debug trace."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def __enter__(self) -> 'Evaluator':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> Optional[Object]:
        if env is None:
            env = Environment()
        return self.evaluate(program, env)

    def evaluate(self, node: Node, env: Environment) -> Optional[Object]:
        # Statements
        if isinstance(node, Program):
            return self.eval_program(node, env)
        if isinstance(node, BlockStatement):
            return self.eval_block_statement(node, env)
        if isinstance(node, ExpressionStatement):
            return self.evaluate(node.expression, env)
        if isinstance(node, LetStatement):
            value = self.evaluate(node.value, env)
            if is_signal(value):
                return value
            env.set(node.name.name, value)
            if self.debug_level >= 2:
                self.debug(f"let {node.name.name} = {value.inspect()}")
            return None
        if isinstance(node, ReturnStatement):
            value = self.evaluate(node.value, env)
            if is_signal(value):
                return value
            return ReturnValue(value)

        # Literals
        if isinstance(node, IntegerLiteral):
            return Integer(node.value)
        if isinstance(node, BooleanLiteral):
            return native_bool_to_boolean(node.value)
        if isinstance(node, StringLiteral):
            return String(node.value)
        if isinstance(node, ArrayLiteral):
            elements = self.eval_expressions(node.elements, env)
            if len(elements) == 1 and is_signal(elements[0]):
                return elements[0]
            return Array(elements)
        if isinstance(node, HashLiteral):
            return self.eval_hash_literal(node, env)
        if isinstance(node, FunctionLiteral):
            return Function(node.parameters, node.body, env)

        # Expressions
        if isinstance(node, Identifier):
            return self.eval_identifier(node, env)
        if isinstance(node, PrefixExpression):
            operand = self.evaluate(node.operand, env)
            if is_signal(operand):
                return operand
            return self.eval_prefix_expression(node.operator, operand)
        if isinstance(node, InfixExpression):
            # right-hand side first; programs may depend on this ordering
            right = self.evaluate(node.right, env)
            if is_signal(right):
                return right
            left = self.evaluate(node.left, env)
            if is_signal(left):
                return left
            return self.eval_infix_expression(node.operator, left, right)
        if isinstance(node, IfExpression):
            return self.eval_if_expression(node, env)
        if isinstance(node, CallExpression):
            function = self.evaluate(node.function, env)
            if is_signal(function):
                return function
            args = self.eval_expressions(node.arguments, env)
            if len(args) == 1 and is_signal(args[0]):
                return args[0]
            return self.apply_function(function, args)
        if isinstance(node, IndexExpression):
            left = self.evaluate(node.left, env)
            if is_signal(left):
                return left
            index = self.evaluate(node.index, env)
            if is_signal(index):
                return index
            return self.eval_index_expression(left, index)

        raise NotImplementedError(f"evaluate: unexpected node type {type(node).__name__}")

    def eval_program(self, program: Program, env: Environment) -> Optional[Object]:
        result: Optional[Object] = None
        for stmt in program.statements:
            result = self.evaluate(stmt, env)
            if self.debug_level >= 1:
                self.debug(f"{stmt} => {result.inspect() if result is not None else '<no value>'}")
            if isinstance(result, ReturnValue):
                return result.value
            if isinstance(result, Error):
                return result
        return result

    def eval_block_statement(self, block: BlockStatement, env: Environment) -> Object:
        result: Optional[Object] = None
        for stmt in block.statements:
            result = self.evaluate(stmt, env)
            # leave ReturnValue wrapped so it escapes every enclosing block
            if is_signal(result):
                return result
        return result if result is not None else NULL

    def eval_expressions(self, expressions: List[Expression], env: Environment) -> List[Object]:
        """Evaluate left to right; on an error or return the result is just [that value]."""
        results: List[Object] = []
        for expr in expressions:
            value = self.evaluate(expr, env)
            if is_signal(value):
                return [value]
            results.append(value)
        return results

    def eval_identifier(self, node: Identifier, env: Environment) -> Object:
        value = env.get(node.name)
        if value is not None:
            return value
        builtin = BUILTINS.get(node.name)
        if builtin is not None:
            return builtin
        return Error(f"identifier not found: {node.name}")

    def eval_prefix_expression(self, operator: str, operand: Object) -> Object:
        if operator == '!':
            return FALSE if is_truthy(operand) else TRUE
        if operator == '-':
            if not isinstance(operand, Integer):
                return Error(f"unknown operator: -{operand.type()}")
            return Integer(wrap_int64(-operand.value))
        return Error(f"unknown operator: {operator}{operand.type()}")

    def eval_infix_expression(self, operator: str, left: Object, right: Object) -> Object:
        if left.type() != right.type():
            return Error(f"type mismatch: {left.type()} {operator} {right.type()}")
        if isinstance(left, Integer) and isinstance(right, Integer):
            return self.eval_integer_infix_expression(operator, left, right)
        if isinstance(left, String) and isinstance(right, String):
            if operator != '+':
                return Error(f"unknown operator: {left.type()} {operator} {right.type()}")
            return String(left.value + right.value)
        # TRUE, FALSE and NULL are singletons; anything else compares by identity
        if operator == '==':
            return native_bool_to_boolean(left is right)
        if operator == '!=':
            return native_bool_to_boolean(left is not right)
        return Error(f"unknown operator: {left.type()} {operator} {right.type()}")

    def eval_integer_infix_expression(self, operator: str, left: Integer, right: Integer) -> Object:
        a, b = left.value, right.value
        if operator == '+':
            return Integer(wrap_int64(a + b))
        if operator == '-':
            return Integer(wrap_int64(a - b))
        if operator == '*':
            return Integer(wrap_int64(a * b))
        if operator == '/':
            if b == 0:
                return Error('division by zero')
            # truncate toward zero
            quotient = abs(a) // abs(b)
            return Integer(wrap_int64(quotient if (a < 0) == (b < 0) else -quotient))
        if operator == '<':
            return native_bool_to_boolean(a < b)
        if operator == '>':
            return native_bool_to_boolean(a > b)
        if operator == '==':
            return native_bool_to_boolean(a == b)
        if operator == '!=':
            return native_bool_to_boolean(a != b)
        return Error(f"unknown operator: {left.type()} {operator} {right.type()}")

    def eval_if_expression(self, node: IfExpression, env: Environment) -> Object:
        condition = self.evaluate(node.condition, env)
        if is_signal(condition):
            return condition
        truthy = is_truthy(condition)
        if self.debug_level >= 3:
            self.debug(f"if condition {condition.inspect()} -> {truthy}")
        if truthy:
            return self.evaluate(node.consequence, env)
        if node.alternative is not None:
            return self.evaluate(node.alternative, env)
        return NULL

    def eval_hash_literal(self, node: HashLiteral, env: Environment) -> Object:
        pairs = {}
        for key_node, value_node in node.pairs:
            key = self.evaluate(key_node, env)
            if is_signal(key):
                return key
            if not isinstance(key, Hashable):
                return Error(f"unusable as hash key: {key.type()}")
            value = self.evaluate(value_node, env)
            if is_signal(value):
                return value
            pairs[key.hash_key()] = HashPair(key, value)
        return Hash(pairs)

    def eval_index_expression(self, left: Object, index: Object) -> Object:
        if isinstance(left, Array):
            if not isinstance(index, Integer):
                return Error(f"index operator not supported: {left.type()}[{index.type()}]")
            if index.value < 0 or index.value >= len(left.elements):
                return NULL
            return left.elements[index.value]
        if isinstance(left, Hash):
            if not isinstance(index, Hashable):
                return Error(f"unusable as hash key: {index.type()}")
            pair = left.pairs.get(index.hash_key())
            return pair.value if pair is not None else NULL
        return Error(f"index operator not supported: {left.type()}")

    def apply_function(self, function: Object, args: List[Object]) -> Object:
        if isinstance(function, Function):
            if len(args) != len(function.parameters):
                return Error(
                    f"wrong number of arguments: want={len(function.parameters)}, got={len(args)}"
                )
            call_env = function.env.enclosed()
            for param, arg in zip(function.parameters, args):
                call_env.set(param.name, arg)
            if self.debug_level >= 2:
                self.debug(f"call {function.inspect()} with ({', '.join(a.inspect() for a in args)})")
            result = self.evaluate(function.body, call_env)
            if isinstance(result, ReturnValue):
                return result.value
            return result
        if isinstance(function, Builtin):
            if function.arity is not None and len(args) != function.arity:
                return Error(
                    f"wrong number of arguments to `{function.name}`: want={function.arity}, got={len(args)}"
                )
            if self.debug_level >= 2:
                self.debug(f"call builtin {function.name}")
            return function.fn(args)
        return Error(f"not a function: {function.type()}")


def evaluate(node: Node, env: Environment) -> Optional[Object]:
    """Evaluate `node` in `env` without tracing."""
    return Evaluator().evaluate(node, env)


def run_program(source: str, debug_level: int = 0) -> Optional[Object]:
    """Parse and evaluate Monkey source in a fresh global environment.

    Raises `ParseError` if the source has syntax errors. Evaluation errors
    are returned as `Error` values.
    """
    program = parse_program(source)
    with Evaluator(debug_level=debug_level) as evaluator:
        return evaluator.run(program, Environment())
