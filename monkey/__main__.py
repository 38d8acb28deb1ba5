"""CLI entry point for the Monkey interpreter.

Usage:
    python -m monkey [-v|-vv|-vvv] [program_file]
    python -m monkey [-v...] --emit-ast <program_file>
    python -m monkey [-v...] --ast <ast_json_file>
    python -m monkey --show-ast <program_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file
  --show-ast    Print the parenthesized rendering of the parsed program

Without a program file the interactive REPL starts. Debug information is
written to `debug.txt` in the current directory when verbosity is greater
than zero.
"""

import argparse
import json
import sys
from pathlib import Path

from .ast_json import ast_to_obj, ast_from_obj
from .errors import MonkeyError
from .parser import parse_program
from .repl import execute_file, make_session, print_parser_errors, start_repl
from .types import Null, is_error


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def parse_or_exit(path: Path):
    program, errors = parse_program(read_source(path))
    if errors:
        print_parser_errors(errors, sys.stderr)
        sys.exit(1)
    return program


def main(argv: list = None) -> None:
    parser = argparse.ArgumentParser(description="Monkey language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='MONKEY_FILE', help='emit AST JSON for the given source file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    group.add_argument('--show-ast', metavar='MONKEY_FILE', help='print the parsed program in canonical form')
    parser.add_argument('program', nargs='?', help='Monkey program file to execute; starts the REPL if omitted')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        program = parse_or_exit(program_file)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(ast_to_obj(program), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    if args.show_ast:
        print(parse_or_exit(Path(args.show_ast)))
        return

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        try:
            program = ast_from_obj(json.loads(read_source(ast_path)))
        except (ValueError, MonkeyError) as e:
            print(f"Error: invalid AST file {ast_path}: {e}", file=sys.stderr)
            sys.exit(1)
        interpreter, env = make_session(debug_level=args.v)
        try:
            result = interpreter.run(program, env)
        except RecursionError:
            print('Error: maximum recursion depth exceeded', file=sys.stderr)
            sys.exit(1)
        finally:
            interpreter.close()
        if not isinstance(result, Null):
            print(result.inspect())
        if is_error(result):
            sys.exit(1)
        return

    if not args.program:
        start_repl(debug_level=args.v)
        return

    program_file = Path(args.program)
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(1)
    result = execute_file(str(program_file), debug_level=args.v)
    if result is None or is_error(result):
        sys.exit(1)


if __name__ == '__main__':
    main()
