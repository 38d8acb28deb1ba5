"""Lexer for the Monkey language.

The lexer walks the source once, keeping the current character and one
character of lookahead. Callers pull tokens with :meth:`Lexer.next_token`
until an EOF token comes back, or simply iterate over the lexer.

Lexing never fails: characters that do not start a valid token become
``ILLEGAL`` tokens, which the parser reports as syntax errors.
"""

from __future__ import annotations

from typing import Iterator

from .tokens import SINGLE_CHAR_TOKENS, Token, TokenType, lookup_ident

# Sentinel for "no more input".
EOF_CHAR = ''

# Two-character operators, keyed by their first character.
TWO_CHAR_TOKENS = {
    '=': ('=', TokenType.EQ),
    '!': ('=', TokenType.NOT_EQ),
    '&': ('&', TokenType.AND),
    '|': ('|', TokenType.OR),
}

WHITESPACE = (' ', '\t', '\r', '\n')


class Lexer:
    def __init__(self, source: str):
        self.source = source
        self.position = 0       # index of self.ch
        self.read_position = 0  # index of the lookahead character
        self.ch = EOF_CHAR
        self.line = 1
        self.column = 0
        self.read_char()

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    def read_char(self) -> None:
        if self.ch == '\n':
            self.line += 1
            self.column = 0
        if self.read_position >= len(self.source):
            self.ch = EOF_CHAR
        else:
            self.ch = self.source[self.read_position]
        self.position = self.read_position
        self.read_position += 1
        self.column += 1

    def peek_char(self) -> str:
        if self.read_position >= len(self.source):
            return EOF_CHAR
        return self.source[self.read_position]

    def skip_whitespace(self) -> None:
        while self.ch != EOF_CHAR and self.ch in WHITESPACE:
            self.read_char()

    def next_token(self) -> Token:
        self.skip_whitespace()
        line, column = self.line, self.column
        ch = self.ch

        if ch == EOF_CHAR:
            return Token(TokenType.EOF, '', line, column)

        if ch in TWO_CHAR_TOKENS:
            second, token_type = TWO_CHAR_TOKENS[ch]
            if self.peek_char() == second:
                self.read_char()
                self.read_char()
                return Token(token_type, ch + second, line, column)
            self.read_char()
            if ch == '=':
                return Token(TokenType.ASSIGN, ch, line, column)
            if ch == '!':
                return Token(TokenType.BANG, ch, line, column)
            # '&' and '|' have no single-character meaning
            return Token(TokenType.ILLEGAL, ch, line, column)

        if ch in SINGLE_CHAR_TOKENS:
            self.read_char()
            return Token(SINGLE_CHAR_TOKENS[ch], ch, line, column)

        if ch == '"':
            return self.read_string(line, column)

        if ch.isalpha():
            word = self.read_identifier()
            return Token(lookup_ident(word), word, line, column)

        if ch.isdecimal():
            return self.read_number(line, column)

        self.read_char()
        return Token(TokenType.ILLEGAL, ch, line, column)

    def read_identifier(self) -> str:
        start = self.position
        while self.ch != EOF_CHAR and self.ch.isalpha():
            self.read_char()
        return self.source[start:self.position]

    def read_number(self, line: int, column: int) -> Token:
        start = self.position
        while self.ch != EOF_CHAR and self.ch.isdecimal():
            self.read_char()
        # a '.' only belongs to the number when a digit follows it
        if self.ch == '.' and self.peek_char().isdecimal():
            self.read_char()
            while self.ch != EOF_CHAR and self.ch.isdecimal():
                self.read_char()
            return Token(TokenType.FLOAT, self.source[start:self.position], line, column)
        return Token(TokenType.INT, self.source[start:self.position], line, column)

    def read_string(self, line: int, column: int) -> Token:
        """Read a double-quoted string verbatim; there are no escapes."""
        quote_position = self.position
        self.read_char()  # opening quote
        start = self.position
        while self.ch != '"':
            if self.ch == EOF_CHAR:
                # unterminated: hand the rest of the input to the parser as one bad token
                return Token(TokenType.ILLEGAL, self.source[quote_position:], line, column)
            self.read_char()
        literal = self.source[start:self.position]
        self.read_char()  # closing quote
        return Token(TokenType.STRING, literal, line, column)


def tokenize(source: str) -> list:
    """Return every token of ``source``, ending with the EOF token."""
    return list(Lexer(source))
