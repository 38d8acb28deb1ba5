from typing import Callable, Dict, List, Optional

from .basic_io import BasicIO
from monkey.builtin_function import BuiltinFunction
from monkey.std import unsupported_argument, wrong_number_of_arguments
from monkey.types import NULL, MonkeyObject, String


def populate_io_builtins(evaluate_line: Callable[[str], MonkeyObject],
                         basic_io: Optional[BasicIO] = None) -> Dict[str, BuiltinFunction]:
    """Build the host I/O builtins.

    ``evaluate_line`` runs one line of source in the caller's session and
    returns its result; the ``get`` builtin hands it whatever the user
    types.
    """
    if basic_io is None:
        basic_io = BasicIO()

    def std_put(args: List[MonkeyObject]) -> MonkeyObject:
        for arg in args:
            basic_io.write_line(arg.inspect())
        return NULL

    def std_get(args: List[MonkeyObject]) -> MonkeyObject:
        if len(args) != 0:
            return wrong_number_of_arguments(len(args), 0)
        text = basic_io.read_line()
        if text is None:
            return NULL
        return evaluate_line(text)

    def std_write(args: List[MonkeyObject]) -> MonkeyObject:
        if len(args) != 2:
            return wrong_number_of_arguments(len(args), 2)
        path, data = args
        if not isinstance(path, String):
            return unsupported_argument('write', path)
        return basic_io.write_file(path.value, data.inspect())

    def std_read(args: List[MonkeyObject]) -> MonkeyObject:
        if len(args) != 1:
            return wrong_number_of_arguments(len(args), 1)
        path = args[0]
        if not isinstance(path, String):
            return unsupported_argument('read', path)
        return basic_io.read_file(path.value)

    def std_clear(args: List[MonkeyObject]) -> MonkeyObject:
        if len(args) != 0:
            return wrong_number_of_arguments(len(args), 0)
        return basic_io.clear_screen()

    return {
        'put': BuiltinFunction('put', None, std_put),
        'get': BuiltinFunction('get', 0, std_get),
        'write': BuiltinFunction('write', 2, std_write),
        'read': BuiltinFunction('read', 1, std_read),
        'clear': BuiltinFunction('clear', 0, std_clear),
    }
