import json

import pytest

from monkey.ast_json import ast_from_obj, ast_to_obj, token_from_obj, token_to_obj
from monkey.errors import MonkeyError
from monkey.interpreter import Interpreter
from monkey.parser import parse_program
from monkey.tokens import Token, TokenType
from monkey.types import Integer

SOURCE = '''
let adder = fn(x, y) { return x + y; };
let items = [1, 2.5, "three", true];
let i = 0;
while (i < 2) { let i = i + 1; };
if (!false && i == 2) { adder(items[0], -i) } else { 0 }
'''


def test_token_serialization():
    token = Token(TokenType.INT, '5', 2, 3)
    assert token_to_obj(token) == {'type': 'INT', 'literal': '5', 'line': 2, 'column': 3}
    assert token_from_obj(token_to_obj(token)) == token


def test_program_survives_json_text():
    program, errors = parse_program(SOURCE)
    assert errors == []
    text = json.dumps(ast_to_obj(program))
    rebuilt = ast_from_obj(json.loads(text))
    assert str(rebuilt) == str(program)
    assert rebuilt == program


def test_rebuilt_program_runs():
    program, _ = parse_program(SOURCE)
    rebuilt = ast_from_obj(json.loads(json.dumps(ast_to_obj(program))))
    assert Interpreter().run(rebuilt) == Integer(-1)


def test_infix_node_shape():
    program, _ = parse_program('1 + 2')
    obj = ast_to_obj(program.statements[0].expression)
    assert obj['type'] == 'InfixExpression'
    assert obj['operator'] == '+'
    assert obj['left']['type'] == 'IntegerLiteral'
    assert obj['left']['value'] == 1


@pytest.mark.parametrize('obj', [
    [],
    {'value': 1},
    {'type': 'Nonsense', 'token': {'type': 'INT', 'literal': '1'}},
    {'type': 'Identifier', 'token': {'type': 'BOGUS', 'literal': 'x'}},
    {'type': 'Identifier', 'token': {'type': 'IDENT', 'literal': 'x'}},
    {'type': 'Identifier', 'token': 'IDENT', 'value': 'x'},
    {'type': 'Identifier', 'token': {'type': ['IDENT']}, 'value': 'x'},
    {'type': 'Program', 'token': {'type': 'INT', 'literal': '1'}, 'statements': 5},
    {'type': 'IntegerLiteral', 'token': {'type': 'INT', 'literal': '1'}, 'value': 'one'},
])
def test_malformed_input_raises(obj):
    with pytest.raises(MonkeyError):
        ast_from_obj(obj)
