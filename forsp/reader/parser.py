"""
  Forsp Reader

- Character-level, single pass, the cursor never moves backwards
- Emits Forsp objects directly:

    - numbers   -> int (base 10, signed 64-bit; anything else is an atom)
    - symbols   -> interned Atom
    - lists     -> Pair chain terminated by Nil, `()` -> Nil
    - 'x        -> quote, x            (two separate reads)
    - ^x        -> quote, x, push      (three reads, via the read-ahead queue)
    - $x        -> quote, x, pop       (three reads, via the read-ahead queue)
    - ; ...     -> comment up to end of line
"""

from __future__ import annotations

import logging
import re
from collections import deque

from forsp import SExpression
from forsp.errors import ForspEndOfInput, ForspSyntaxError
from forsp.types.intern import InternTable
from forsp.types.nil import Nil
from forsp.types.objects import Atom, Pair

log = logging.getLogger(__name__)

WHITESPACE = frozenset(" \t\n")
DIRECTIVES = frozenset("'^$")
PUNCTUATION = WHITESPACE | DIRECTIVES | frozenset("();")

INT_RE = re.compile(r"[+-]?[0-9]+\Z", re.ASCII)
INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


def parse_int64(text: str) -> int | None:
    """Parse `text` as a base-10 signed 64-bit integer, or return None."""
    if not INT_RE.match(text):
        return None
    n = int(text)
    if n < INT64_MIN or n > INT64_MAX:
        return None
    return n


class Reader:
    """Reads one object at a time from a text buffer.

    `^` and `$` expand into three objects; the two not returned right away
    wait in `pending` and are handed out before any more input is consumed.
    """

    def __init__(self, table: InternTable, quote: Atom, push: Atom, pop: Atom, source: str = ""):
        self.table = table
        self.atom_quote = quote
        self.atom_push = push
        self.atom_pop = pop
        self.pending: deque[SExpression] = deque()
        self.source = source
        self.pos = 0

    def set_source(self, source: str) -> None:
        self.source = source
        self.pos = 0

    # --- cursor ---
    def peek(self) -> str:
        """Current character, or '' at end of input. A NUL also ends the input."""
        if self.pos >= len(self.source):
            return ""
        c = self.source[self.pos]
        return "" if c == "\0" else c

    def advance(self) -> None:
        self.pos += 1

    def at_end(self) -> bool:
        return not self.pending and self.peek() == ""

    def skip_white_and_comments(self) -> None:
        while True:
            c = self.peek()
            if c in WHITESPACE:
                self.advance()
            elif c == ";":
                self.advance()
                while self.peek() not in ("", "\n"):
                    self.advance()
            else:
                return

    # --- grammar ---
    def read(self) -> SExpression:
        """Consume and return exactly one object."""
        if self.pending:
            return self.pending.popleft()

        self.skip_white_and_comments()

        c = self.peek()
        if c == "":
            raise ForspEndOfInput("End of input: could not read()")
        if c == "'":
            self.advance()
            return self.atom_quote
        if c == "^":
            self.advance()
            return self._expand(self.atom_push)
        if c == "$":
            self.advance()
            return self._expand(self.atom_pop)
        if c == "(":
            self.advance()
            return self.read_list()
        return self.read_scalar()

    def _expand(self, action: Atom) -> SExpression:
        scalar = self.read_scalar()
        log.debug("directive expanded to quote %s %s", scalar, action.name)
        self.pending.extend((self.atom_quote, scalar, action))
        return self.read()

    def read_list(self) -> SExpression:
        items = []
        while True:
            # an expansion in flight owns the next elements, even before a ')'
            if not self.pending:
                self.skip_white_and_comments()
                if self.peek() == ")":
                    self.advance()
                    break
            items.append(self.read())

        result = Nil
        for item in reversed(items):
            result = Pair(item, result)
        return result

    def read_scalar(self) -> SExpression:
        start = self.pos
        while True:
            c = self.peek()
            if c == "" or c in PUNCTUATION:
                break
            self.advance()

        text = self.source[start:self.pos]
        n = parse_int64(text)
        if n is not None:
            return n
        return self.table.intern(text)

    def read_all(self):
        """Yield objects until the input is exhausted."""
        while True:
            if not self.pending:
                self.skip_white_and_comments()
                if self.at_end():
                    return
                if self.peek() == ")":
                    raise ForspSyntaxError(f"Unexpected ')' at offset {self.pos}")
            yield self.read()
