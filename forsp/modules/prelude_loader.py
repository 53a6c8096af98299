from __future__ import annotations
import logging
from pathlib import Path
from typing import Protocol

from forsp.config import DEFAULT_PRELUDE


log = logging.getLogger(__name__)


class _HasRun(Protocol):
    def run(self, source: str) -> None: ...


def load_prelude(itp: _HasRun, path: str | Path | None = None) -> None:
    """Compute the prelude file (one top-level list) in the interpreter.

    With no path the bundled core prelude is used.
    """
    p = Path(path) if path is not None else DEFAULT_PRELUDE
    if not p.is_file():
        raise FileNotFoundError(f"Cannot find prelude '{p}'")
    log.debug("loading prelude %s", p)
    itp.run(p.read_text(encoding='utf-8'))
