from __future__ import annotations

import logging
from pathlib import Path
from typing import IO

from forsp import ForspValue, PrimitiveFn, SExpression
from forsp.builtin.env_builtin import register
from forsp.evaluation.evaluator import compute, evaluate
from forsp.printer import print_obj
from forsp.reader.parser import Reader
from forsp.types.environment import env_define_prim, stack_pop, stack_push
from forsp.types.intern import InternTable
from forsp.types.nil import Nil
from forsp.types.objects import iter_list

log = logging.getLogger(__name__)


class Interpreter:
    """
    One Forsp machine: intern table, value stack, top-level environment and
    the reader that the `read` primitive shares with the driver.
    """

    def __init__(self, out: IO[str] | None = None, prelude: str | Path | None = None):
        # None means whatever sys.stdout is at print time
        self.out = out

        self.table = InternTable()
        self.atom_true = self.table.intern("t")
        self.atom_quote = self.table.intern("quote")
        self.atom_push = self.table.intern("push")
        self.atom_pop = self.table.intern("pop")

        self.stack: ForspValue = Nil
        self.reader = Reader(self.table, self.atom_quote, self.atom_push, self.atom_pop)
        self.env: ForspValue = register(self, Nil)

        if prelude is not None:
            # Lazy import to avoid circular imports
            from forsp.modules.prelude_loader import load_prelude
            load_prelude(self, prelude)

    # --- stack ---
    def push(self, obj: ForspValue) -> None:
        self.stack = stack_push(self.stack, obj)

    def pop(self) -> ForspValue:
        obj, self.stack = stack_pop(self.stack)
        return obj

    def stack_items(self) -> list[ForspValue]:
        """The stack as a Python list, top first."""
        return list(iter_list(self.stack))

    # --- reader ---
    def set_source(self, source: str) -> None:
        self.reader.set_source(source)

    def read(self) -> SExpression:
        return self.reader.read()

    def intern(self, name: str):
        return self.table.intern(name)

    # --- evaluation ---
    def compute(self, obj: SExpression) -> None:
        """Run `obj` as a computation against the top-level environment."""
        self.env = compute(self, obj, self.env)

    def eval(self, obj: SExpression) -> None:
        """Evaluate `obj` as a single command against the top-level environment."""
        self.env = evaluate(self, obj, self.env)

    def run(self, source: str) -> None:
        """Read one object from `source` and compute it."""
        self.set_source(source)
        self.compute(self.read())

    def define_primitive(self, name: str, fn: PrimitiveFn) -> None:
        log.debug("defining primitive %s", name)
        self.env = env_define_prim(self.env, self.table, name, fn)

    # --- output ---
    def print(self, obj: ForspValue) -> None:
        print(print_obj(obj), file=self.out)
