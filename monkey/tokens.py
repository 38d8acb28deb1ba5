"""Token definitions for the Monkey language.

Tokens are produced by the lexer and consumed immediately by the parser.
Each token records its kind, the literal source text and the position of
its first character, which the parser uses when reporting diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    ILLEGAL = 'ILLEGAL'
    EOF = 'EOF'

    # Identifiers and literals
    IDENT = 'IDENT'
    INT = 'INT'
    FLOAT = 'FLOAT'
    STRING = 'STRING'

    # Operators
    ASSIGN = '='
    PLUS = '+'
    MINUS = '-'
    BANG = '!'
    ASTERISK = '*'
    SLASH = '/'
    EQ = '=='
    NOT_EQ = '!='
    AND = '&&'
    OR = '||'
    LT = '<'
    GT = '>'

    # Delimiters
    COMMA = ','
    SEMICOLON = ';'
    LPAREN = '('
    RPAREN = ')'
    LBRACE = '{'
    RBRACE = '}'
    LBRACKET = '['
    RBRACKET = ']'

    # Keywords
    FUNCTION = 'FUNCTION'
    LET = 'LET'
    TRUE = 'TRUE'
    FALSE = 'FALSE'
    IF = 'IF'
    ELSE = 'ELSE'
    WHILE = 'WHILE'
    RETURN = 'RETURN'

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Token:
    type: TokenType
    literal: str
    line: int = 0
    column: int = 0

    def __repr__(self) -> str:
        return f"<{self.type}: {self.literal!r} at {self.line}:{self.column}>"


KEYWORDS = {
    'fn': TokenType.FUNCTION,
    'let': TokenType.LET,
    'true': TokenType.TRUE,
    'false': TokenType.FALSE,
    'if': TokenType.IF,
    'else': TokenType.ELSE,
    'while': TokenType.WHILE,
    'return': TokenType.RETURN,
}

# Characters that always form a token on their own. '=' and '!' are
# missing here because they may start a two-character operator.
SINGLE_CHAR_TOKENS = {
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '*': TokenType.ASTERISK,
    '/': TokenType.SLASH,
    '<': TokenType.LT,
    '>': TokenType.GT,
    ',': TokenType.COMMA,
    ';': TokenType.SEMICOLON,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
    '{': TokenType.LBRACE,
    '}': TokenType.RBRACE,
    '[': TokenType.LBRACKET,
    ']': TokenType.RBRACKET,
}


def lookup_ident(ident: str) -> TokenType:
    """Classify a word as a keyword or a plain identifier."""
    return KEYWORDS.get(ident, TokenType.IDENT)
