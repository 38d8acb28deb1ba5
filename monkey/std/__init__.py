"""Standard builtins for the Monkey language.

These builtins have no side effects outside the interpreter and are
installed by default. Host I/O builtins live in :mod:`monkey.std.io`.
Every builtin reports bad input by returning an ``Error`` value.
"""

from typing import Dict, List

from monkey.builtin_function import BuiltinFunction
from monkey.types import NULL, Array, Error, Integer, MonkeyObject, String


def wrong_number_of_arguments(got: int, want: int) -> Error:
    return Error(f"wrong number of arguments. got={got}, want={want}")


def unsupported_argument(name: str, arg: MonkeyObject) -> Error:
    return Error(f"argument to `{name}` not supported, got {arg.type()}")


def std_len(args: List[MonkeyObject]) -> MonkeyObject:
    if len(args) != 1:
        return wrong_number_of_arguments(len(args), 1)
    arg = args[0]
    if isinstance(arg, String):
        return Integer(len(arg.value))
    if isinstance(arg, Array):
        return Integer(len(arg.elements))
    return unsupported_argument('len', arg)


def std_string(args: List[MonkeyObject]) -> MonkeyObject:
    if len(args) != 1:
        return wrong_number_of_arguments(len(args), 1)
    return String(args[0].inspect())


def std_first(args: List[MonkeyObject]) -> MonkeyObject:
    if len(args) != 1:
        return wrong_number_of_arguments(len(args), 1)
    arr = args[0]
    if not isinstance(arr, Array):
        return unsupported_argument('first', arr)
    return arr.elements[0] if arr.elements else NULL


def std_last(args: List[MonkeyObject]) -> MonkeyObject:
    if len(args) != 1:
        return wrong_number_of_arguments(len(args), 1)
    arr = args[0]
    if not isinstance(arr, Array):
        return unsupported_argument('last', arr)
    return arr.elements[-1] if arr.elements else NULL


def std_rest(args: List[MonkeyObject]) -> MonkeyObject:
    if len(args) != 1:
        return wrong_number_of_arguments(len(args), 1)
    arr = args[0]
    if not isinstance(arr, Array):
        return unsupported_argument('rest', arr)
    if not arr.elements:
        return NULL
    return Array(list(arr.elements[1:]))


def std_push(args: List[MonkeyObject]) -> MonkeyObject:
    if len(args) != 2:
        return wrong_number_of_arguments(len(args), 2)
    arr, item = args
    if not isinstance(arr, Array):
        return unsupported_argument('push', arr)
    return Array(arr.elements + [item])


def std_append(args: List[MonkeyObject]) -> MonkeyObject:
    # Unlike push, append mutates the array it is given
    if len(args) != 2:
        return wrong_number_of_arguments(len(args), 2)
    arr, item = args
    if not isinstance(arr, Array):
        return unsupported_argument('append', arr)
    arr.elements.append(item)
    return NULL


def standard_builtins() -> Dict[str, BuiltinFunction]:
    """Return a fresh registry of the standard builtins."""
    return {
        'len': BuiltinFunction('len', 1, std_len),
        'string': BuiltinFunction('string', 1, std_string),
        'first': BuiltinFunction('first', 1, std_first),
        'last': BuiltinFunction('last', 1, std_last),
        'rest': BuiltinFunction('rest', 1, std_rest),
        'push': BuiltinFunction('push', 2, std_push),
        'append': BuiltinFunction('append', 2, std_append),
    }
