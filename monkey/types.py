"""Runtime values for the Monkey interpreter.

Every value the evaluator produces is a :class:`MonkeyObject`. Integers,
floats, booleans, strings and null are immutable and compare by value;
arrays are the only mutable aggregate. :class:`ReturnValue` and
:class:`Error` are control-flow wrappers: the evaluator uses them to
unwind blocks and never lets a program bind one to a name.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum
from reprlib import recursive_repr
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from .ast import BlockStatement, Identifier
    from .environment import Environment

# Two floats are equal when they differ by less than this.
FLOAT_EPSILON = sys.float_info.epsilon

# Integers are signed 64-bit; arithmetic wraps around on overflow.
INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1


class ObjectType(Enum):
    INTEGER = 'INTEGER'
    FLOAT = 'FLOAT'
    BOOLEAN = 'BOOLEAN'
    STRING = 'STRING'
    NULL = 'NULL'
    ARRAY = 'ARRAY'
    FUNCTION = 'FUNCTION'
    BUILTIN = 'BUILTIN'
    RETURN_VALUE = 'RETURN_VALUE'
    ERROR = 'ERROR'

    def __str__(self) -> str:
        return self.value


class MonkeyObject:
    """Base class for all runtime values."""
    object_type: ObjectType

    def type(self) -> ObjectType:
        return self.object_type

    def inspect(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class Integer(MonkeyObject):
    value: int
    object_type = ObjectType.INTEGER

    def inspect(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Float(MonkeyObject):
    value: float
    object_type = ObjectType.FLOAT

    def inspect(self) -> str:
        # Use repr for a concise round-trip representation
        return repr(self.value)


@dataclass(frozen=True)
class Boolean(MonkeyObject):
    value: bool
    object_type = ObjectType.BOOLEAN

    def inspect(self) -> str:
        return 'true' if self.value else 'false'


@dataclass(frozen=True)
class String(MonkeyObject):
    value: str
    object_type = ObjectType.STRING

    def inspect(self) -> str:
        return self.value


@dataclass(frozen=True)
class Null(MonkeyObject):
    object_type = ObjectType.NULL

    def inspect(self) -> str:
        return 'null'


@dataclass
class Array(MonkeyObject):
    elements: List[MonkeyObject] = field(default_factory=list)
    object_type = ObjectType.ARRAY

    # an array may contain itself through append
    @recursive_repr('[...]')
    def inspect(self) -> str:
        return '[' + ', '.join(e.inspect() for e in self.elements) + ']'


@dataclass(eq=False)
class Function(MonkeyObject):
    """A user-defined function together with the scope it was created in."""
    parameters: List[Identifier]
    body: BlockStatement
    env: Environment
    object_type = ObjectType.FUNCTION

    def inspect(self) -> str:
        params = ','.join(str(p) for p in self.parameters)
        return f"fn({params}){self.body}"

    def __repr__(self) -> str:
        return f"<function fn({','.join(str(p) for p in self.parameters)})>"


@dataclass(frozen=True)
class ReturnValue(MonkeyObject):
    value: MonkeyObject
    object_type = ObjectType.RETURN_VALUE

    def inspect(self) -> str:
        return self.value.inspect()


@dataclass(frozen=True)
class Error(MonkeyObject):
    """A runtime error travelling up through the evaluator as a value."""
    message: str
    object_type = ObjectType.ERROR

    def inspect(self) -> str:
        return f"Error: {self.message}"


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def wrap_int64(value: int) -> int:
    return (value - INT64_MIN) % 2 ** 64 + INT64_MIN


def native_bool_to_boolean(value: bool) -> Boolean:
    return TRUE if value else FALSE


def is_error(obj: MonkeyObject) -> bool:
    return isinstance(obj, Error)


def new_error(message: str) -> Error:
    return Error(message)


def is_truthy(obj: MonkeyObject) -> bool:
    """Only ``true`` and non-zero integers among their types are truthy;
    every value of any other type is truthy."""
    if isinstance(obj, Boolean):
        return obj.value
    if isinstance(obj, Integer):
        return obj.value != 0
    return True
