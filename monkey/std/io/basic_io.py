import builtins
import os
import sys
from typing import Optional, TextIO

from monkey.types import NULL, Error, MonkeyObject, Null, String


class BasicIO:
    """Console and file access used by the host I/O builtins."""
    def __init__(self, stdout: Optional[TextIO] = None):
        self.stdout = stdout

    def write_line(self, text: str) -> Null:
        print(text, file=self.stdout or sys.stdout)
        return NULL

    def read_line(self) -> Optional[str]:
        try:
            return builtins.input()
        except EOFError:
            return None

    def clear_screen(self) -> Null:
        out = self.stdout or sys.stdout
        out.write('\033[2J\033[H')
        out.flush()
        return NULL

    def read_file(self, filename: str) -> MonkeyObject:
        if not os.path.isfile(filename):
            return Error(f"the file({filename}) wasn't found")
        try:
            with open(filename, 'r', encoding='utf-8') as f:
                return String(f.read())
        except OSError as e:
            return Error(f"error reading file {filename}: {e.strerror}")
        except UnicodeDecodeError:
            return Error(f"the file({filename}) is not valid UTF-8 text")

    def write_file(self, filename: str, data: str) -> MonkeyObject:
        try:
            with open(filename, 'w', encoding='utf-8') as f:
                f.write(data)
            return NULL
        except OSError as e:
            return Error(f"error writing file {filename}: {e.strerror}")
