from monkey.parser import parse_program
from monkey.repl import make_session


def test_program_5_recursive_map(capsys, example_source):
    program, errors = parse_program(example_source('program_5.monkey'))
    assert errors == []
    interp, env = make_session()
    interp.run(program, env)
    out = capsys.readouterr().out.strip()
    assert out == '[2, 4, 6, 8]'
