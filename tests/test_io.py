import builtins
import io

from monkey.parser import parse_program
from monkey.repl import make_session
from monkey.std.io import populate_io_builtins
from monkey.std.io.basic_io import BasicIO
from monkey.types import NULL, Error, Integer, String


def run_session(source):
    interp, env = make_session()
    program, errors = parse_program(source)
    assert errors == []
    return interp.run(program, env)


def test_put_prints_each_argument(capsys):
    result = run_session('put(1, "two", [3], true)')
    assert result is NULL
    assert capsys.readouterr().out.splitlines() == ['1', 'two', '[3]', 'true']


def test_put_with_no_arguments_prints_nothing(capsys):
    assert run_session('put()') is NULL
    assert capsys.readouterr().out == ''


def test_get_evaluates_input_in_session(monkeypatch):
    monkeypatch.setattr(builtins, 'input', lambda prompt='': 'x * 2')
    assert run_session('let x = 21; get()') == Integer(42)


def test_get_binds_into_session(monkeypatch):
    monkeypatch.setattr(builtins, 'input', lambda prompt='': 'let y = 3')
    assert run_session('get(); y + 1') == Integer(4)


def test_get_returns_null_on_end_of_input(monkeypatch):
    def raise_eof(prompt=''):
        raise EOFError
    monkeypatch.setattr(builtins, 'input', raise_eof)
    assert run_session('get()') is NULL


def test_get_prints_parser_errors(monkeypatch, capsys):
    monkeypatch.setattr(builtins, 'input', lambda prompt='': 'let = ;')
    assert run_session('get()') is NULL
    out = capsys.readouterr().out
    assert out.startswith('Parser errors:\n\t')


def test_get_checks_arity():
    assert run_session('get(1)') == Error('wrong number of arguments. got=1, want=0')


def test_write_then_read(tmp_path):
    path = tmp_path / 'out.txt'
    assert run_session(f'write("{path}", [1, 2])') is NULL
    assert path.read_text(encoding='utf-8') == '[1, 2]'
    assert run_session(f'read("{path}")') == String('[1, 2]')


def test_read_missing_file(tmp_path):
    path = tmp_path / 'missing.txt'
    assert run_session(f'read("{path}")') == Error(f"the file({path}) wasn't found")


def test_read_requires_string_path():
    assert run_session('read(1)') == Error('argument to `read` not supported, got INTEGER')


def test_clear_writes_escape_sequence():
    out = io.StringIO()
    registry = populate_io_builtins(lambda text: NULL, BasicIO(stdout=out))
    assert registry['clear'].fn([]) is NULL
    assert out.getvalue() == '\033[2J\033[H'


def test_put_uses_basic_io_stream():
    out = io.StringIO()
    registry = populate_io_builtins(lambda text: NULL, BasicIO(stdout=out))
    registry['put'].fn([Integer(1), String('a')])
    assert out.getvalue() == '1\na\n'


def test_read_non_utf8_file_is_an_error(tmp_path):
    path = tmp_path / 'binary.dat'
    path.write_bytes(b'\xff\xfe\x00bad')
    assert run_session(f'read("{path}")') == Error(f"the file({path}) is not valid UTF-8 text")
