"""Command-line driver.

    forsp FILE   read one object from FILE and compute it
    forsp        REPL: compute the first object of each stdin line until `bye`

Exit status is 1 when the program file cannot be read and 2 when the
interpreter fails.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

from forsp.config import configure_logging, get_prelude_path, get_recursion_limit
from forsp.errors import ForspError
from forsp.interpreter import Interpreter

log = logging.getLogger(__name__)


class ReplInterpreter(Interpreter):
    """Interpreter with the `bye` primitive the REPL loop checks."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.done = False
        self.define_primitive("bye", prim_bye)


def prim_bye(interp: ReplInterpreter, env):
    interp.done = True
    return env


def run_file(interp: Interpreter, path: str) -> None:
    # undecodable bytes survive as lone surrogates, like raw bytes in atoms
    source = Path(path).read_bytes().decode("utf-8", "surrogateescape")
    log.debug("running %s", path)
    interp.run(source)


def repl(interp: ReplInterpreter, stdin: TextIO) -> None:
    while not interp.done:
        line = stdin.readline()
        if not line:
            break
        line = line.rstrip("\r\n")
        if not line.strip():
            continue
        interp.run(line)


def _accept_raw_bytes(stream) -> None:
    reconfigure = getattr(stream, "reconfigure", None)
    if reconfigure is not None:
        reconfigure(errors="surrogateescape")


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    configure_logging()
    for stream in (sys.stdin, sys.stdout):
        _accept_raw_bytes(stream)
    sys.setrecursionlimit(max(sys.getrecursionlimit(), get_recursion_limit()))

    try:
        interp = ReplInterpreter(prelude=get_prelude_path())
        if args:
            run_file(interp, args[0])
        else:
            repl(interp, sys.stdin)
    except ForspError as ex:
        print(ex.describe(), file=sys.stderr)
        return 2
    except OSError as ex:
        print(ex, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
