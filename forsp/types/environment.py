"""Environment and stack operations for Forsp.

Both are plain Pair lists terminated by Nil. An environment is a list of
(key . value) bindings; defining a name prepends a binding and never touches
existing pairs, so a closure holding an older environment keeps seeing the
bindings it captured while later code extends the list.
"""

from __future__ import annotations

from forsp import ForspValue, PrimitiveFn
from forsp.errors import ForspStackUnderflow, ForspTypeError, ForspUnboundSymbol
from forsp.types.intern import InternTable
from forsp.types.nil import Nil
from forsp.types.objects import Atom, Pair, Primitive, car, cdr, describe


def env_find(env: ForspValue, key: ForspValue) -> ForspValue:
    """Return the value of the most recent binding of `key` in `env`."""
    if not isinstance(key, Atom):
        raise ForspTypeError(f"Expected 'key' to be an Atom in env_find() got {describe(key)}")

    node = env
    while node is not Nil:
        kv = car(node)
        k = car(kv)
        if k is key or (isinstance(k, Atom) and k.name == key.name):
            return cdr(kv)
        node = cdr(node)

    raise ForspUnboundSymbol(f"Failed to find key='{key.name}' in environment")


def env_define(env: ForspValue, key: ForspValue, val: ForspValue) -> Pair:
    return Pair(Pair(key, val), env)


def env_define_prim(env: ForspValue, table: InternTable, name: str, fn: PrimitiveFn) -> Pair:
    return env_define(env, table.intern(name), Primitive(fn, name))


def stack_push(stack: ForspValue, val: ForspValue) -> Pair:
    return Pair(val, stack)


def stack_pop(stack: ForspValue) -> tuple[ForspValue, ForspValue]:
    """Return (top, rest) of `stack`."""
    if stack is Nil:
        raise ForspStackUnderflow("Value Stack Underflow")
    return car(stack), cdr(stack)
