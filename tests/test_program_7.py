from monkey.parser import parse_program
from monkey.repl import make_session


def test_program_7_strings_and_floats(capsys, example_source):
    program, errors = parse_program(example_source('program_7.monkey'))
    assert errors == []
    interp, env = make_session()
    interp.run(program, env)
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines == ['Hello, Monkey!', '3.0', '10 apples', '6']
