from dataclasses import dataclass
from typing import Optional


@dataclass
class ParseError:
    line: Optional[int]
    message: str

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"Line {self.line}: {self.message}"


class DSLSyntaxError(Exception):
    """Raised inside the block scanner when a construct cannot be finished.

    Never escapes parse_dsl: the scan loop turns it into a ParseError.
    """

    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line
