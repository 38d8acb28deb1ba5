import builtins
import json

import pytest

from monkey.__main__ import main


def write_program(tmp_path, source, name='prog.monkey'):
    path = tmp_path / name
    path.write_text(source, encoding='utf-8')
    return path


def test_runs_program_file(tmp_path, capsys):
    path = write_program(tmp_path, 'put("hi"); 1 + 1')
    main([str(path)])
    assert capsys.readouterr().out.splitlines() == ['hi', '2']


def test_runtime_error_exits_with_status_one(tmp_path, capsys):
    path = write_program(tmp_path, '1 + true')
    with pytest.raises(SystemExit) as excinfo:
        main([str(path)])
    assert excinfo.value.code == 1
    assert capsys.readouterr().out == 'Error: type mismatch: INTEGER + BOOLEAN\n'


def test_missing_program_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / 'missing.monkey')])
    assert excinfo.value.code == 1
    assert 'not found' in capsys.readouterr().err


def test_show_ast(tmp_path, capsys):
    path = write_program(tmp_path, 'let x = 1 + 2 * 3;')
    main(['--show-ast', str(path)])
    assert capsys.readouterr().out == 'let x = (1 + (2 * 3))\n'


def test_show_ast_with_parse_errors(tmp_path, capsys):
    path = write_program(tmp_path, 'let x 1;')
    with pytest.raises(SystemExit) as excinfo:
        main(['--show-ast', str(path)])
    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith('Parser errors:\n\t1:7:')


def test_emit_ast_then_run_it(tmp_path, capsys):
    path = write_program(tmp_path, 'let double = fn(x) { x * 2 }; double(21)')
    main(['--emit-ast', str(path)])
    ast_path = tmp_path / 'prog.monkey.ast.json'
    assert capsys.readouterr().out.strip() == str(ast_path)
    obj = json.loads(ast_path.read_text(encoding='utf-8'))
    assert obj['type'] == 'Program'

    main(['--ast', str(ast_path)])
    assert capsys.readouterr().out == '42\n'


def test_invalid_ast_file(tmp_path, capsys):
    path = write_program(tmp_path, '{"type": "Nonsense"}', name='bad.ast.json')
    with pytest.raises(SystemExit) as excinfo:
        main(['--ast', str(path)])
    assert excinfo.value.code == 1
    assert 'invalid AST file' in capsys.readouterr().err


def test_verbose_writes_debug_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    path = write_program(tmp_path, 'let a = 1; a')
    main(['-vv', str(path)])
    assert capsys.readouterr().out == '1\n'
    log = (tmp_path / 'debug.txt').read_text()
    assert 'let a = 1' in log


def test_without_program_starts_repl(monkeypatch, capsys):
    inputs = iter(['1 + 2', 'exit'])
    monkeypatch.setattr(builtins, 'input', lambda prompt='': next(inputs))
    main([])
    assert capsys.readouterr().out.splitlines() == ['Monkey 1.0', '3']


def test_ast_file_with_bad_token_field(tmp_path, capsys):
    path = write_program(tmp_path, '{"type": "Identifier", "token": 5, "value": "x"}', name='bad.ast.json')
    with pytest.raises(SystemExit) as excinfo:
        main(['--ast', str(path)])
    assert excinfo.value.code == 1
    assert 'invalid AST file' in capsys.readouterr().err


def test_ast_run_reports_runaway_recursion(tmp_path, capsys):
    path = write_program(tmp_path, 'let f = fn(n) { f(n + 1) }; f(0)')
    main(['--emit-ast', str(path)])
    capsys.readouterr()
    with pytest.raises(SystemExit) as excinfo:
        main(['--ast', str(tmp_path / 'prog.monkey.ast.json')])
    assert excinfo.value.code == 1
    assert capsys.readouterr().err == 'Error: maximum recursion depth exceeded\n'
