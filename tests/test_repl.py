import builtins
import io

from monkey.repl import (
    PROMPT, execute_file, execute_source, make_session, print_parser_errors, start_repl,
)
from monkey.types import NULL, Integer


def feed(monkeypatch, lines):
    inputs = iter(lines)
    prompts = []

    def fake_input(prompt=''):
        prompts.append(prompt)
        try:
            return next(inputs)
        except StopIteration:
            raise EOFError
    monkeypatch.setattr(builtins, 'input', fake_input)
    return prompts


def test_print_parser_errors():
    out = io.StringIO()
    print_parser_errors(['1:1: first', '2:3: second'], out)
    assert out.getvalue() == 'Parser errors:\n\t1:1: first\n\t2:3: second\n'


def test_execute_source_prints_result():
    out = io.StringIO()
    interp, env = make_session(out=out)
    assert execute_source('1 + 2', interp, env, out) == Integer(3)
    assert out.getvalue() == '3\n'


def test_execute_source_does_not_echo_null():
    out = io.StringIO()
    interp, env = make_session(out=out)
    assert execute_source('let a = 1;', interp, env, out) is NULL
    assert out.getvalue() == ''


def test_execute_source_reports_parse_errors_and_skips_evaluation():
    out = io.StringIO()
    interp, env = make_session(out=out)
    assert execute_source('let a 1; let b = 2;', interp, env, out) is None
    assert out.getvalue() == 'Parser errors:\n\t1:7: expected next token to be ASSIGN, got INT instead\n'
    assert env.get('b') == (None, False)


def test_execute_source_prints_runtime_errors():
    out = io.StringIO()
    interp, env = make_session(out=out)
    execute_source('nope', interp, env, out)
    assert out.getvalue() == 'Error: identifier not found: nope\n'


def test_execute_source_reports_runaway_recursion():
    out = io.StringIO()
    interp, env = make_session(out=out)
    assert execute_source('let f = fn(n) { f(n + 1) }; f(0)', interp, env, out) is None
    assert out.getvalue() == 'Error: maximum recursion depth exceeded\n'


def test_execute_file(tmp_path):
    path = tmp_path / 'prog.monkey'
    path.write_text('let a = [1, 2]; a', encoding='utf-8')
    out = io.StringIO()
    assert execute_file(str(path), out=out) is not None
    assert out.getvalue() == '[1, 2]\n'


def test_execute_missing_file(tmp_path):
    path = tmp_path / 'nope.monkey'
    out = io.StringIO()
    assert execute_file(str(path), out=out) is None
    assert out.getvalue() == f"Error: the file({path}) wasn't found\n"


def test_repl_keeps_environment_between_lines(monkeypatch):
    prompts = feed(monkeypatch, ['let a = 5;', 'let f = fn(x) { x + a };', 'f(10)', 'exit', 'a'])
    out = io.StringIO()
    start_repl(out=out)
    assert out.getvalue().splitlines() == ['Monkey 1.0', '15']
    assert prompts == [PROMPT] * 4


def test_repl_short_exit_command(monkeypatch):
    feed(monkeypatch, ['e', '1'])
    out = io.StringIO()
    start_repl(out=out)
    assert out.getvalue() == 'Monkey 1.0\n'


def test_repl_stops_at_end_of_input(monkeypatch):
    feed(monkeypatch, ['', '1 + 1'])
    out = io.StringIO()
    start_repl(out=out)
    assert out.getvalue().splitlines() == ['Monkey 1.0', '2', '']


def test_repl_continues_after_errors(monkeypatch):
    feed(monkeypatch, ['let = 1', 'x', '2'])
    out = io.StringIO()
    start_repl(out=out)
    lines = out.getvalue().splitlines()
    assert lines[1] == 'Parser errors:'
    assert lines[3] == 'Error: identifier not found: x'
    assert lines[4] == '2'
