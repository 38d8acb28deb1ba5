from typing import Dict, Optional, Tuple

from monkey.types import MonkeyObject


class Environment:
    """Represents a scope mapping identifiers to runtime values.

    Lookups walk outward through the chain of enclosing scopes. Writes
    always land in the local scope: the language has no way to assign to
    a binding of an outer scope, only to shadow it.
    """
    def __init__(self, outer: Optional['Environment'] = None):
        self.outer = outer
        self.store: Dict[str, MonkeyObject] = {}

    @classmethod
    def new_enclosed(cls, outer: 'Environment') -> 'Environment':
        return cls(outer)

    def get(self, name: str) -> Tuple[Optional[MonkeyObject], bool]:
        if name in self.store:
            return self.store[name], True
        if self.outer is not None:
            return self.outer.get(name)
        return None, False

    def set(self, name: str, value: MonkeyObject) -> MonkeyObject:
        self.store[name] = value
        return value

    def __repr__(self) -> str:
        return f"<Environment {sorted(self.store)} outer={self.outer is not None}>"
