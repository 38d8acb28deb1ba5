"""Tree-walking interpreter for the Monkey language.

:class:`Interpreter` evaluates AST nodes directly against an
:class:`~monkey.environment.Environment`. Runtime failures are never
raised: they are :class:`~monkey.types.Error` values that travel back up
through the evaluator exactly like ``return`` does, stopping every
enclosing block until they reach the program level. A function call
unwraps a ``ReturnValue`` but passes an ``Error`` through untouched.

Builtins are supplied by the host as a registry (name to
:class:`~monkey.builtin_function.BuiltinFunction`). They are looked up
before the environment, so programs cannot shadow them.
"""

from __future__ import annotations

from typing import Dict, List, Optional, TextIO

from .ast import (
    ArrayLiteral, BlockStatement, BooleanLiteral, CallExpression, Expression,
    ExpressionStatement, FloatLiteral, FunctionLiteral, Identifier, IfExpression,
    IndexExpression, InfixExpression, IntegerLiteral, LetStatement, Node,
    PrefixExpression, Program, ReturnStatement, StringLiteral, WhileExpression,
)
from .builtin_function import BuiltinFunction
from .environment import Environment
from .errors import MonkeyError
from .parser import parse_program
from .std import standard_builtins, wrong_number_of_arguments
from .types import (
    FLOAT_EPSILON, NULL, Array, Boolean, Error, Float, Function, Integer,
    MonkeyObject, ReturnValue, String, is_error, is_truthy,
    native_bool_to_boolean, new_error, wrap_int64,
)


class Interpreter:
    """Core interpreter that evaluates Monkey ASTs."""
    def __init__(self, builtins: Optional[Dict[str, BuiltinFunction]] = None,
                 debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.builtins: Dict[str, BuiltinFunction] = standard_builtins() if builtins is None else builtins
        self.global_env = Environment()
        self.debug_level = debug_level
        self.debug_fp: Optional[TextIO] = open(debug_file, 'w') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> MonkeyObject:
        if env is None:
            env = self.global_env
        if self.debug_level >= 1:
            self.debug(f"run program with {len(program.statements)} statements")
        result = self.evaluate(program, env)
        if self.debug_level >= 1:
            self.debug(f"program result: {result.inspect()}")
        return result

    def evaluate(self, node: Node, env: Environment) -> MonkeyObject:
        # Statements
        if isinstance(node, Program):
            return self.eval_program(node, env)
        if isinstance(node, BlockStatement):
            return self.eval_block_statement(node, env)
        if isinstance(node, ExpressionStatement):
            return self.evaluate(node.expression, env)
        if isinstance(node, ReturnStatement):
            value = self.evaluate(node.value, env)
            if is_error(value):
                return value
            return ReturnValue(value)
        if isinstance(node, LetStatement):
            value = self.evaluate(node.value, env)
            if is_error(value):
                return value
            env.set(node.name.value, value)
            if self.debug_level >= 2:
                self.debug(f"let {node.name.value} = {value.inspect()}")
            return NULL

        # Literals
        if isinstance(node, IntegerLiteral):
            return Integer(node.value)
        if isinstance(node, FloatLiteral):
            return Float(node.value)
        if isinstance(node, StringLiteral):
            return String(node.value)
        if isinstance(node, BooleanLiteral):
            return native_bool_to_boolean(node.value)
        if isinstance(node, ArrayLiteral):
            elements = self.eval_expressions(node.elements, env)
            if len(elements) == 1 and is_error(elements[0]):
                return elements[0]
            return Array(elements)
        if isinstance(node, FunctionLiteral):
            return Function(node.parameters, node.body, env)

        # Expressions
        if isinstance(node, Identifier):
            return self.eval_identifier(node, env)
        if isinstance(node, PrefixExpression):
            right = self.evaluate(node.right, env)
            if is_error(right):
                return right
            return self.eval_prefix_expression(node.operator, right)
        if isinstance(node, InfixExpression):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            if is_error(left):
                return left
            if is_error(right):
                return right
            return self.eval_infix_expression(node.operator, left, right)
        if isinstance(node, IfExpression):
            return self.eval_if_expression(node, env)
        if isinstance(node, WhileExpression):
            return self.eval_while_expression(node, env)
        if isinstance(node, CallExpression):
            function = self.evaluate(node.function, env)
            if is_error(function):
                return function
            args = self.eval_expressions(node.arguments, env)
            if len(args) == 1 and is_error(args[0]):
                return args[0]
            return self.apply_function(function, args)
        if isinstance(node, IndexExpression):
            left = self.evaluate(node.left, env)
            if is_error(left):
                return left
            index = self.evaluate(node.index, env)
            if is_error(index):
                return index
            return self.eval_index_expression(left, index)

        return new_error(f"cannot evaluate node {type(node).__name__}")

    def eval_program(self, program: Program, env: Environment) -> MonkeyObject:
        result: MonkeyObject = NULL
        for statement in program.statements:
            result = self.evaluate(statement, env)
            if isinstance(result, ReturnValue):
                return result.value
            if isinstance(result, Error):
                return result
        return result

    def eval_block_statement(self, block: BlockStatement, env: Environment) -> MonkeyObject:
        result: MonkeyObject = NULL
        for statement in block.statements:
            result = self.evaluate(statement, env)
            # leave the wrapper intact so enclosing blocks stop too
            if isinstance(result, (ReturnValue, Error)):
                return result
        return result

    def eval_expressions(self, expressions: List[Expression], env: Environment) -> List[MonkeyObject]:
        """Evaluate left to right; the first error replaces the whole list."""
        result: List[MonkeyObject] = []
        for expression in expressions:
            evaluated = self.evaluate(expression, env)
            if is_error(evaluated):
                return [evaluated]
            result.append(evaluated)
        return result

    def eval_identifier(self, node: Identifier, env: Environment) -> MonkeyObject:
        builtin = self.builtins.get(node.value)
        if builtin is not None:
            return builtin
        value, found = env.get(node.value)
        if not found:
            return new_error(f"identifier not found: {node.value}")
        return value

    def eval_prefix_expression(self, operator: str, right: MonkeyObject) -> MonkeyObject:
        if operator == '!':
            if not isinstance(right, Boolean):
                return new_error(f"unknown operator: !{right.type()}")
            return native_bool_to_boolean(not right.value)
        if operator == '-':
            if isinstance(right, Integer):
                return Integer(wrap_int64(-right.value))
            if isinstance(right, Float):
                return Float(-right.value)
            return new_error(f"unknown operator: -{right.type()}")
        return new_error(f"unknown operator: {operator}{right.type()}")

    def eval_infix_expression(self, operator: str, left: MonkeyObject, right: MonkeyObject) -> MonkeyObject:
        if isinstance(left, Integer) and isinstance(right, Integer):
            return self.eval_integer_infix_expression(operator, left, right)
        if isinstance(left, Float) and isinstance(right, Float):
            return self.eval_float_infix_expression(operator, left, right)
        if isinstance(left, Boolean) and isinstance(right, Boolean):
            return self.eval_boolean_infix_expression(operator, left, right)
        if isinstance(left, String) and isinstance(right, String):
            if operator == '+':
                return String(left.value + right.value)
        if left.type() != right.type():
            return new_error(f"type mismatch: {left.type()} {operator} {right.type()}")
        return new_error(f"unknown operator: {left.type()} {operator} {right.type()}")

    def eval_integer_infix_expression(self, operator: str, left: Integer, right: Integer) -> MonkeyObject:
        a, b = left.value, right.value
        if operator == '+':
            return Integer(wrap_int64(a + b))
        if operator == '-':
            return Integer(wrap_int64(a - b))
        if operator == '*':
            return Integer(wrap_int64(a * b))
        if operator == '/':
            if b == 0:
                return new_error('division by zero')
            # integer division truncating toward zero
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
        return new_error(f"unknown operator: {left.type()} {operator} {right.type()}")

    def eval_float_infix_expression(self, operator: str, left: Float, right: Float) -> MonkeyObject:
        a, b = left.value, right.value
        if operator == '+':
            return Float(a + b)
        if operator == '-':
            return Float(a - b)
        if operator == '*':
            return Float(a * b)
        if operator == '/':
            if b == 0.0:
                return new_error('division by zero')
            return Float(a / b)
        if operator == '<':
            return native_bool_to_boolean(a < b)
        if operator == '>':
            return native_bool_to_boolean(a > b)
        if operator == '==':
            return native_bool_to_boolean(abs(a - b) < FLOAT_EPSILON)
        if operator == '!=':
            return native_bool_to_boolean(not abs(a - b) < FLOAT_EPSILON)
        return new_error(f"unknown operator: {left.type()} {operator} {right.type()}")

    def eval_boolean_infix_expression(self, operator: str, left: Boolean, right: Boolean) -> MonkeyObject:
        a, b = left.value, right.value
        if operator == '==':
            return native_bool_to_boolean(a == b)
        if operator == '!=':
            return native_bool_to_boolean(a != b)
        if operator == '&&':
            return native_bool_to_boolean(a and b)
        if operator == '||':
            return native_bool_to_boolean(a or b)
        return new_error(f"unknown operator: {left.type()} {operator} {right.type()}")

    def eval_if_expression(self, node: IfExpression, env: Environment) -> MonkeyObject:
        condition = self.evaluate(node.condition, env)
        if is_error(condition):
            return condition
        truthy = is_truthy(condition)
        if self.debug_level >= 3:
            self.debug(f"if condition {condition.inspect()} -> {truthy}")
        if truthy:
            return self.evaluate(node.consequence, env)
        if node.alternative is not None:
            return self.evaluate(node.alternative, env)
        return NULL

    def eval_while_expression(self, node: WhileExpression, env: Environment) -> MonkeyObject:
        results: List[MonkeyObject] = []
        iteration = 0
        while True:
            condition = self.evaluate(node.condition, env)
            if is_error(condition):
                return condition
            if not is_truthy(condition):
                break
            iteration += 1
            if self.debug_level >= 3:
                self.debug(f"while iteration {iteration}")
            result = self.evaluate(node.body, env)
            if is_error(result):
                return Array([result])
            if isinstance(result, ReturnValue):
                return result
            results.append(result)
        return Array(results)

    def eval_index_expression(self, left: MonkeyObject, index: MonkeyObject) -> MonkeyObject:
        if isinstance(left, Array) and isinstance(index, Integer):
            i = index.value
            if i < 0 or i >= len(left.elements):
                return new_error(f"index out of range: {i}")
            return left.elements[i]
        return new_error(f"index operator not supported: {left.type()}[{index.type()}]")

    def apply_function(self, fn: MonkeyObject, args: List[MonkeyObject]) -> MonkeyObject:
        if isinstance(fn, BuiltinFunction):
            # Check arity; None means variadic
            if fn.arity is not None and len(args) != fn.arity:
                return wrong_number_of_arguments(len(args), fn.arity)
            if self.debug_level >= 2:
                self.debug(f"call builtin {fn.name} with {len(args)} arguments")
            return fn.fn(args)
        if isinstance(fn, Function):
            if len(args) != len(fn.parameters):
                return new_error(
                    f"wrong number of arguments. got={len(args)}, want={len(fn.parameters)}")
            if self.debug_level >= 2:
                self.debug(f"call {fn!r} with {len(args)} arguments")
            call_env = Environment.new_enclosed(fn.env)
            for param, arg in zip(fn.parameters, args):
                call_env.set(param.value, arg)
            evaluated = self.evaluate(fn.body, call_env)
            if isinstance(evaluated, ReturnValue):
                return evaluated.value
            return evaluated
        return new_error(f"not a function: {fn.type()}")


def run_program(source: str, builtins: Optional[Dict[str, BuiltinFunction]] = None,
                debug_level: int = 0) -> MonkeyObject:
    """Convenience function to parse and evaluate a Monkey program from source."""
    program, errors = parse_program(source)
    if errors:
        raise MonkeyError('parser errors', errors)
    interpreter = Interpreter(builtins=builtins, debug_level=debug_level)
    try:
        return interpreter.run(program)
    finally:
        interpreter.close()


def compile_file(file_path: str, debug_level: int = 0) -> MonkeyObject:
    """Parse and evaluate a Monkey source file, returning its result."""
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    return run_program(source, debug_level=debug_level)
