# Monkey language package
# This package provides a lexer, a Pratt parser and a tree-walking interpreter for the Monkey language.
from .errors import MonkeyError
from .environment import Environment
from .interpreter import Interpreter, compile_file, run_program
from .lexer import Lexer
from .parser import Parser, parse_program

__all__ = [
    'Environment',
    'Interpreter',
    'Lexer',
    'MonkeyError',
    'Parser',
    'compile_file',
    'parse_program',
    'run_program',
]
