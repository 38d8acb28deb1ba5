from dataclasses import dataclass
from typing import Callable, List, Optional

from monkey.types import MonkeyObject, ObjectType


@dataclass(eq=False)
class BuiltinFunction(MonkeyObject):
    name: str
    arity: Optional[int]  # None means variadic
    fn: Callable[[List[MonkeyObject]], MonkeyObject]
    object_type = ObjectType.BUILTIN

    def inspect(self) -> str:
        return 'builtin function'

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"
