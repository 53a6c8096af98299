from __future__ import annotations

"""
Lightweight indexer for Forsp files without evaluating code.

We scan the token stream for:
- bindings: `$name` and the long form `'name pop`
- parenthesis balance, including a `)` with nothing open

and run the real reader over the buffer to report the first syntax error.
The scan is tolerant of partial buffers; it only extracts enough structure to
power LSP features (document symbols, hover, completion, diagnostics).
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Tuple
import re

from forsp.builtin.env_builtin import PRIMITIVE_SIGNATURES
from forsp.errors import ForspError
from forsp.reader.parser import Reader, parse_int64
from forsp.types.intern import InternTable

# Comments, parens, directive markers, scalars
TOKEN_REGEX = re.compile(r";[^\n]*|[()'^$]|[^\s()'^$;]+")

# Characters that end a word under the cursor
WORD_BREAKS = " \t\r\n()'^$;"


@dataclass
class SymbolDef:
    name: str
    kind: str  # "binding" | "pop"
    line: int
    col: int


@dataclass
class ReaderError:
    message: str
    line: int
    col: int


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    paren_balance: int = 0
    stray_close: Optional[Tuple[int, int]] = None  # first ')' with nothing open
    errors: List[ReaderError] = field(default_factory=list)


def _iter_tokens(text: str):
    for m in TOKEN_REGEX.finditer(text):
        tok = m.group(0)
        if tok.startswith(';'):
            continue
        yield tok, m.start(), m.end()


def position_from_offset(text: str, offset: int) -> Tuple[int, int]:
    # Return (line, col), 0-based
    line = text.count("\n", 0, offset)
    last_nl = text.rfind("\n", 0, offset)
    col = offset if last_nl == -1 else offset - last_nl - 1
    return line, col


def _is_name(tok: str) -> bool:
    return tok not in ('(', ')', "'", '^', '$') and parse_int64(tok) is None


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    tokens = list(_iter_tokens(text))

    for i, (tok, start, end) in enumerate(tokens):
        if tok == '(':
            idx.paren_balance += 1
        elif tok == ')':
            idx.paren_balance -= 1
            if idx.paren_balance < 0 and idx.stray_close is None:
                idx.stray_close = position_from_offset(text, start)
        elif tok == '$' and i + 1 < len(tokens):
            # `$` binds the scalar glued to it
            name, s, _ = tokens[i + 1]
            if s == end and _is_name(name):
                line, col = position_from_offset(text, s)
                idx.symbols[name] = SymbolDef(name=name, kind='binding', line=line, col=col)
        elif tok == 'pop' and i >= 2:
            # 'name pop
            q, _, q_end = tokens[i - 2]
            name, s, _ = tokens[i - 1]
            if q == "'" and q_end == s and _is_name(name):
                line, col = position_from_offset(text, s)
                idx.symbols.setdefault(name, SymbolDef(name=name, kind='pop', line=line, col=col))

    err = check_syntax(text)
    if err is not None:
        idx.errors.append(err)
    return idx


def check_syntax(text: str) -> Optional[ReaderError]:
    """Read every top-level object in `text`; report the first reader failure."""
    table = InternTable()
    reader = Reader(table, table.intern('quote'), table.intern('push'), table.intern('pop'), text)
    try:
        for _ in reader.read_all():
            pass
    except ForspError as ex:
        line, col = position_from_offset(text, min(reader.pos, len(text)))
        return ReaderError(message=str(ex), line=line, col=col)
    return None


def word_at(text: str, line: int, character: int) -> Optional[str]:
    """The token under (line, character), without directive markers."""
    lines = text.splitlines(True)
    if line >= len(lines):
        return None
    src = lines[line]
    start = min(character, len(src))
    while start > 0 and src[start - 1] not in WORD_BREAKS:
        start -= 1
    end = min(character, len(src))
    while end < len(src) and src[end] not in WORD_BREAKS:
        end += 1
    word = src[start:end]
    return word or None


# Primitive stack effects for quick hover/completion without eval
BUILTIN_SIGNATURES: Dict[str, str] = dict(PRIMITIVE_SIGNATURES)
