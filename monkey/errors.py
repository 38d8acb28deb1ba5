from typing import List


class MonkeyError(Exception):
    """Raised by the host-facing helpers when a program cannot be run.

    Runtime failures inside a program are ``Error`` values, never
    exceptions; this type only covers problems such as syntax errors in
    the source handed to :func:`monkey.interpreter.run_program`.
    """
    def __init__(self, message: str, errors: List[str] = None):
        super().__init__(message)
        self.errors = list(errors or [])

    def __str__(self) -> str:
        if not self.errors:
            return super().__str__()
        return super().__str__() + ''.join(f"\n\t{e}" for e in self.errors)
