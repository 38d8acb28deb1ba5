from monkey.parser import parse_program
from monkey.repl import make_session


def test_program_3_while_sum(capsys, example_source):
    program, errors = parse_program(example_source('program_3.monkey'))
    assert errors == []
    interp, env = make_session()
    interp.run(program, env)
    out = capsys.readouterr().out.strip()
    assert out == '55'
    value, found = env.get('i')
    assert found and value.inspect() == '10'
