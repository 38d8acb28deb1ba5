"""Drivers that feed source text through the interpreter.

``execute_source`` handles one unit of source (a REPL line or a whole
file): syntax errors are printed and evaluation is skipped, otherwise the
result is evaluated and its display form printed. ``start_repl`` loops
over input lines sharing one environment; ``execute_file`` runs a file.
"""

import builtins
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from .environment import Environment
from .interpreter import Interpreter
from .parser import parse_program
from .std.io import populate_io_builtins
from .types import NULL, MonkeyObject, Null

PROMPT = '>> '
BANNER = 'Monkey 1.0'
EXIT_COMMANDS = ('exit', 'e')


def print_parser_errors(errors: List[str], out: Optional[TextIO] = None) -> None:
    out = out or sys.stdout
    print('Parser errors:', file=out)
    for error in errors:
        print(f"\t{error}", file=out)


def evaluate_source(source: str, interpreter: Interpreter, env: Environment,
                    out: Optional[TextIO] = None) -> MonkeyObject:
    """Parse and evaluate ``source`` without printing its result.

    Parser errors are printed and give ``NULL``.
    """
    program, errors = parse_program(source)
    if errors:
        print_parser_errors(errors, out)
        return NULL
    return interpreter.run(program, env)


def execute_source(source: str, interpreter: Interpreter, env: Environment,
                   out: Optional[TextIO] = None) -> Optional[MonkeyObject]:
    """Run one unit of source and print its result.

    Returns ``None`` when the source had syntax errors, otherwise the
    evaluated result. ``NULL`` results are not printed.
    """
    out = out or sys.stdout
    program, errors = parse_program(source)
    if errors:
        print_parser_errors(errors, out)
        return None
    try:
        result = interpreter.run(program, env)
    except RecursionError:
        print('Error: maximum recursion depth exceeded', file=out)
        return None
    if not isinstance(result, Null):
        print(result.inspect(), file=out)
    return result


def make_session(debug_level: int = 0, out: Optional[TextIO] = None):
    """Create an interpreter and environment with the host I/O builtins installed."""
    interpreter = Interpreter(debug_level=debug_level)
    env = interpreter.global_env
    interpreter.builtins.update(
        populate_io_builtins(lambda text: evaluate_source(text, interpreter, env, out)))
    return interpreter, env


def execute_file(path: str, debug_level: int = 0, out: Optional[TextIO] = None) -> Optional[MonkeyObject]:
    out = out or sys.stdout
    file_path = Path(path)
    if not file_path.is_file():
        print(f"Error: the file({path}) wasn't found", file=out)
        return None
    source = file_path.read_text(encoding='utf-8')
    interpreter, env = make_session(debug_level, out)
    try:
        return execute_source(source, interpreter, env, out)
    finally:
        interpreter.close()


def start_repl(debug_level: int = 0, out: Optional[TextIO] = None) -> None:
    out = out or sys.stdout
    print(BANNER, file=out)
    interpreter, env = make_session(debug_level, out)
    try:
        while True:
            try:
                line = builtins.input(PROMPT)
            except EOFError:
                print(file=out)
                break
            if line.strip() in EXIT_COMMANDS:
                break
            if not line.strip():
                continue
            execute_source(line, interpreter, env, out)
    finally:
        interpreter.close()
