"""Abstract Syntax Tree (AST) definitions for the Monkey language.

The classes in this module represent the syntactic structure of parsed
Monkey programs. Every node keeps the token it was built from and renders
back to source-like text through ``str()``. The rendering fully
parenthesizes prefix and infix expressions, so ``-1 + 2 * 3`` becomes
``((-1) + (2 * 3))``; tests rely on this form to check precedence.
Statements are separated by ``;`` so the rendering parses back to the
same tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .tokens import Token


@dataclass
class Node:
    """Base class for all AST nodes."""
    token: Token

    def token_literal(self) -> str:
        return self.token.literal


class Statement(Node):
    pass


class Expression(Node):
    pass


@dataclass
class Program(Node):
    statements: List[Statement] = field(default_factory=list)

    def token_literal(self) -> str:
        return self.statements[0].token_literal() if self.statements else ''

    def __str__(self) -> str:
        return ';\n'.join(str(s) for s in self.statements)


@dataclass
class Identifier(Expression):
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass
class LetStatement(Statement):
    name: Identifier
    value: Expression

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} = {self.value}"


@dataclass
class ReturnStatement(Statement):
    value: Expression

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.value}"


@dataclass
class ExpressionStatement(Statement):
    expression: Expression

    def __str__(self) -> str:
        return str(self.expression)


@dataclass
class BlockStatement(Statement):
    statements: List[Statement] = field(default_factory=list)

    def __str__(self) -> str:
        if not self.statements:
            return '{\n}'
        return '{\n' + ';\n'.join(str(s) for s in self.statements) + '\n}'


@dataclass
class IntegerLiteral(Expression):
    value: int

    def __str__(self) -> str:
        return self.token_literal()


@dataclass
class FloatLiteral(Expression):
    value: float

    def __str__(self) -> str:
        return self.token_literal()


@dataclass
class BooleanLiteral(Expression):
    value: bool

    def __str__(self) -> str:
        return self.token_literal()


@dataclass
class StringLiteral(Expression):
    value: str

    def __str__(self) -> str:
        return f'"{self.value}"'


@dataclass
class ArrayLiteral(Expression):
    elements: List[Expression] = field(default_factory=list)

    def __str__(self) -> str:
        return '[' + ','.join(str(e) for e in self.elements) + ']'


@dataclass
class PrefixExpression(Expression):
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass
class InfixExpression(Expression):
    left: Expression
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass
class IndexExpression(Expression):
    left: Expression
    index: Expression

    def __str__(self) -> str:
        return f"({self.left}[{self.index}])"


@dataclass
class IfExpression(Expression):
    condition: Expression
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None

    def __str__(self) -> str:
        text = f"if{render_condition(self.condition)} {self.consequence}"
        if self.alternative is not None:
            text += f"else{self.alternative}"
        return text


@dataclass
class WhileExpression(Expression):
    condition: Expression
    body: BlockStatement

    def __str__(self) -> str:
        return f"while{render_condition(self.condition)} {self.body}"


@dataclass
class FunctionLiteral(Expression):
    parameters: List[Identifier]
    body: BlockStatement

    def __str__(self) -> str:
        params = ','.join(str(p) for p in self.parameters)
        return f"{self.token_literal()}({params}){self.body}"


@dataclass
class CallExpression(Expression):
    function: Expression
    arguments: List[Expression] = field(default_factory=list)

    def __str__(self) -> str:
        args = ','.join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


def render_condition(condition: Expression) -> str:
    """Render an ``if``/``while`` condition so it stays separate from the keyword."""
    text = str(condition)
    if isinstance(condition, (PrefixExpression, InfixExpression, IndexExpression)):
        return text
    return f"({text})"
