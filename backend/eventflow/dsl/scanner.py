"""
Character cursor shared by the block grammar.

Every read either consumes at least one character or returns an empty
token without moving. Loops built on top of it must call
``ensure_progress`` with the position they started from, so a character
that matches no token shape is skipped instead of being retried forever.
"""

import re
from typing import List, Optional

from eventflow.ir.errors import ParseError

# '-' is part of identifiers (web-gateway) unless it starts an arrow
_IDENTIFIER_RE = re.compile(r"(?:[A-Za-z0-9_]|-(?!>))+")

QUOTES = "\"'"


class Scanner:
    def __init__(self, text: str, errors: Optional[List[ParseError]] = None):
        self.text = text
        self.pos = 0
        self.line = 1
        self.errors = errors if errors is not None else []

    # ---------- inspection ----------

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self, offset: int = 0) -> str:
        index = self.pos + offset
        if 0 <= index < len(self.text):
            return self.text[index]
        return ""

    def match(self, pattern: "re.Pattern[str]") -> Optional["re.Match[str]"]:
        return pattern.match(self.text, self.pos)

    # ---------- movement ----------

    def advance(self) -> str:
        """Consume one character and return it ("" at end of input)."""
        if self.at_end:
            return ""
        ch = self.text[self.pos]
        self.pos += 1
        if ch == "\n":
            self.line += 1
        return ch

    def ensure_progress(self, start: int) -> bool:
        """Skip one character if nothing was consumed since ``start``.

        Returns True when a character had to be skipped.
        """
        if self.pos == start and not self.at_end:
            self.advance()
            return True
        return False

    def skip_whitespace(self):
        """Skip spaces, newlines and '#' comments."""
        while not self.at_end:
            ch = self.text[self.pos]
            if ch == "#":
                self.skip_line()
            elif ch.isspace():
                self.advance()
            else:
                break

    def skip_inline_space(self):
        while not self.at_end and self.text[self.pos] in " \t\r":
            self.pos += 1

    def skip_line(self):
        """Move to the next newline without consuming it."""
        end = self.text.find("\n", self.pos)
        self.pos = len(self.text) if end < 0 else end

    # ---------- tokens ----------

    def identifier(self) -> str:
        self.skip_whitespace()
        m = self.match(_IDENTIFIER_RE)
        if not m:
            return ""
        self.pos = m.end()
        return m.group(0)

    def string(self) -> str:
        """Read a quoted string. Strings end at the closing quote or the line."""
        ch = self.peek()
        if not ch or ch not in QUOTES:
            return ""
        quote = self.advance()
        start_line = self.line
        chars = []
        while not self.at_end and self.peek() not in (quote, "\n"):
            chars.append(self.advance())
        if self.peek() == quote:
            self.advance()
        else:
            self.errors.append(ParseError(start_line, "Unterminated string"))
        return "".join(chars)

    def read_until(self, stops: str) -> str:
        start = self.pos
        while not self.at_end and self.text[self.pos] not in stops:
            self.advance()
        return self.text[start:self.pos]

    def rest_of_line(self) -> str:
        return self.read_until("\n")
