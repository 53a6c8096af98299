from __future__ import annotations

from typing import Iterator

from forsp.errors import ForspAssertionError
from forsp.types.nil import Nil
from forsp.types.objects import Atom, Pair, describe


class InternTable:
    """Canonical Atom instances, kept as a Pair list with the newest first.

    Two atoms with the same text are always the same object, so the rest of
    the interpreter compares atoms with `is`.
    """

    __slots__ = ("entries",)

    def __init__(self):
        self.entries = Nil

    def intern(self, text: str) -> Atom:
        node = self.entries
        while node is not Nil:
            if not isinstance(node, Pair):
                raise ForspAssertionError(f"interned_atoms must be Pairs got {describe(node)}")
            elem = node.car
            if not isinstance(elem, Atom):
                raise ForspAssertionError(f"interned_atoms.car must be an Atom got {describe(elem)}")
            if len(elem.name) == len(text) and elem.name == text:
                return elem
            node = node.cdr

        atom = Atom(text)
        self.entries = Pair(atom, self.entries)
        return atom

    def atoms(self) -> Iterator[Atom]:
        node = self.entries
        while isinstance(node, Pair):
            yield node.car
            node = node.cdr

    def __contains__(self, text: str) -> bool:
        return any(a.name == text for a in self.atoms())

    def __len__(self) -> int:
        return sum(1 for _ in self.atoms())
