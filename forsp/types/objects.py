"""Object model for Forsp values.

Every value is one of six variants, identified by `Tag`:

    - Nil       -> the `Nil` singleton
    - Atom      -> `Atom`, created only through the intern table
    - Number    -> plain Python int, kept inside the signed 64-bit range
    - Pair      -> `Pair`, never mutated after construction
    - Closure   -> `Closure`, an unevaluated body plus its captured env
    - Primitive -> `Primitive`, a host callable `fn(interp, env) -> env`

Atoms, pairs, closures and primitives compare by identity. Numbers compare
by value; `obj_equal` is the single place that encodes that rule.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable, Iterator

from forsp import ForspValue, PrimitiveFn
from forsp.errors import ForspTypeError
from forsp.types.nil import Nil, NilType

_INT64_MIN = -(1 << 63)
_UINT64 = 1 << 64


class Tag(IntEnum):
    NIL = 0
    ATOM = 1
    NUMBER = 2
    PAIR = 3
    CLOSURE = 4
    PRIMITIVE = 5


class Atom:
    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def __repr__(self):
        return f"Atom({self.name!r})"

    def __str__(self):
        return self.name


class Pair:
    __slots__ = ("car", "cdr")

    def __init__(self, car: ForspValue, cdr: ForspValue):
        self.car = car
        self.cdr = cdr

    def __repr__(self):
        return f"Pair({self.car!r}, {self.cdr!r})"


class Closure:
    """A suspended computation: a list body and the environment it closed over."""

    __slots__ = ("body", "env")

    def __init__(self, body: ForspValue, env: ForspValue):
        self.body = body
        self.env = env

    def __repr__(self):
        return f"<Closure at {id(self):#x}>"


class Primitive:
    __slots__ = ("fn", "name")

    def __init__(self, fn: PrimitiveFn, name: str = ""):
        self.fn = fn
        self.name = name or getattr(fn, "__name__", "")

    def __repr__(self):
        return f"<Primitive {self.name}>"


def wrap_int64(n: int) -> int:
    """Fold an arbitrary int into two's-complement signed 64-bit range."""
    return (n - _INT64_MIN) % _UINT64 + _INT64_MIN


def make_number(n: int) -> int:
    return wrap_int64(int(n))


def is_number(obj: ForspValue) -> bool:
    # bool is an int subclass but never a Forsp value
    return type(obj) is int


def tag_of(obj: ForspValue) -> Tag:
    if obj is Nil:
        return Tag.NIL
    if isinstance(obj, Atom):
        return Tag.ATOM
    if is_number(obj):
        return Tag.NUMBER
    if isinstance(obj, Pair):
        return Tag.PAIR
    if isinstance(obj, Closure):
        return Tag.CLOSURE
    if isinstance(obj, Primitive):
        return Tag.PRIMITIVE
    raise ForspTypeError(f"Not a Forsp value: {obj!r}")


def obj_equal(a: ForspValue, b: ForspValue) -> bool:
    return a is b or (is_number(a) and is_number(b) and a == b)


def to_int64(obj: ForspValue) -> int:
    return obj if is_number(obj) else 0


def car(obj: ForspValue) -> ForspValue:
    if not isinstance(obj, Pair):
        raise ForspTypeError(f"Expected Pair to apply car() function got {describe(obj)}")
    return obj.car


def cdr(obj: ForspValue) -> ForspValue:
    if not isinstance(obj, Pair):
        raise ForspTypeError(f"Expected Pair to apply cdr() function got {describe(obj)}")
    return obj.cdr


def describe(obj: ForspValue) -> str:
    """Short label used in error messages: the text for atoms and numbers,
    the variant name for everything else."""
    if isinstance(obj, Atom):
        return obj.name
    if is_number(obj):
        return str(obj)
    if isinstance(obj, NilType):
        return "Nil"
    if isinstance(obj, (Pair, Closure, Primitive)):
        return type(obj).__name__
    return "unknown"


def from_iterable(items: Iterable[ForspValue], tail: ForspValue = Nil) -> ForspValue:
    """Build a Pair chain from `items`, terminated by `tail`."""
    result = tail
    for item in reversed(list(items)):
        result = Pair(item, result)
    return result


def iter_list(obj: ForspValue) -> Iterator[ForspValue]:
    """Yield the elements of a Pair chain; an improper tail is ignored."""
    while isinstance(obj, Pair):
        yield obj.car
        obj = obj.cdr
