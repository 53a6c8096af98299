"""Textual rendering of Forsp values.

Nil, atoms, numbers and pairs print in a form the reader accepts again.
Closures and primitives print as debug tokens carrying their host identity.
"""

from __future__ import annotations

from io import StringIO

from forsp import ForspValue
from forsp.types.nil import Nil
from forsp.types.objects import Atom, Closure, Pair, Primitive, is_number


def print_obj(obj: ForspValue) -> str:
    with StringIO() as buffer:
        _write(buffer, obj)
        return buffer.getvalue()


def _write(buffer: StringIO, obj: ForspValue) -> None:
    if obj is Nil:
        buffer.write("()")
    elif isinstance(obj, Atom):
        buffer.write(obj.name)
    elif is_number(obj):
        buffer.write(str(obj))
    elif isinstance(obj, Pair):
        buffer.write("(")
        _write(buffer, obj.car)
        _write_list_tail(buffer, obj.cdr)
    elif isinstance(obj, Closure):
        buffer.write("CLOSURE<")
        _write(buffer, obj.body)
        buffer.write(f", {id(obj.env):#x}>")
    elif isinstance(obj, Primitive):
        buffer.write(f"PRIM<{id(obj.fn):#x}>")


def _write_list_tail(buffer: StringIO, obj: ForspValue) -> None:
    while isinstance(obj, Pair):
        buffer.write(" ")
        _write(buffer, obj.car)
        obj = obj.cdr
    if obj is not Nil:
        buffer.write(" . ")
        _write(buffer, obj)
    buffer.write(")")
